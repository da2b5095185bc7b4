import logging
from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from civichub.db import crud
from civichub.errors import ValidationError
from civichub.models import Base, Solution, User


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def users(db):
    alice = User(name="Alice", email="alice@example.com", password_hash="x")
    bob = User(name="Bob", email="bob@example.com", password_hash="x")
    db.add_all([alice, bob])
    await db.commit()
    return alice.id, bob.id


async def _problem(db, author_id, title="Broken streetlight", **kwargs):
    data = dict(
        description="The streetlight has been out for two weeks now.",
        location="Elm St",
        lat=12.9,
        lng=77.6,
        images=["http://x/1.jpg"],
        category="Infrastructure",
    )
    data.update(kwargs)
    return await crud.create_problem(db, author_id=author_id, title=title, **data)


async def _solution(db, author_id, problem_id, **kwargs):
    return await crud.create_solution(
        db, author_id=author_id, problem_id=problem_id,
        description="Replace the bulb and check the wiring box.", **kwargs,
    )


async def _count_accepted(db, problem_id):
    return await db.scalar(
        select(func.count(Solution.id)).where(
            Solution.problem_id == problem_id, Solution.is_accepted.is_(True),
        )
    )


async def test_create_and_get_problem(db, users):
    alice, _ = users
    problem = await _problem(db, alice, tags=["lights"])
    assert problem.status == "Open"
    assert problem.priority == "Medium"
    assert problem.author.name == "Alice"

    fetched = await crud.get_problem(db, problem.id)
    assert fetched.coordinates == {"lat": 12.9, "lng": 77.6}
    assert fetched.tags == ["lights"]


async def test_vote_projection_lists_user_once(db, users):
    alice, bob = users
    problem = await _problem(db, alice)

    problem = await crud.vote_on_problem(db, problem, bob, "upvote")
    problem = await crud.vote_on_problem(db, problem, bob, "upvote")
    assert [u.id for u in problem.upvotes] == [bob]
    assert problem.upvote_count == 1

    problem = await crud.vote_on_problem(db, problem, bob, "downvote")
    assert problem.upvotes == []
    assert [u.name for u in problem.downvotes] == ["Bob"]

    problem = await crud.vote_on_problem(db, problem, bob, "remove")
    assert problem.upvote_count == 0
    assert problem.downvote_count == 0


async def test_list_problems_filters_and_paginates(db, users):
    alice, _ = users
    for i in range(3):
        await _problem(db, alice, title=f"Streetlight number {i}")
    await _problem(db, alice, title="Dirty river bank", category="Environment")

    page = await crud.list_problems(db, category="Infrastructure", page=1, limit=2)
    assert page.total == 3
    assert page.total_pages == 2
    assert len(page.items) == 2

    page = await crud.list_problems(db, category="Infrastructure", page=2, limit=2)
    assert len(page.items) == 1


async def test_list_problems_sorted_by_upvotes(db, users):
    alice, bob = users
    quiet = await _problem(db, alice, title="Quiet problem here")
    popular = await _problem(db, alice, title="Popular problem here")
    await crud.vote_on_problem(db, popular, bob, "upvote")
    await crud.vote_on_problem(db, await crud.get_problem(db, popular.id), alice, "upvote")

    page = await crud.list_problems(db, sort_by="upvoteCount")
    assert [p.id for p in page.items] == [popular.id, quiet.id]


async def test_unknown_sort_is_rejected(db, users):
    with pytest.raises(ValidationError):
        await crud.list_problems(db, sort_by="password_hash")


async def test_accept_keeps_single_accepted_solution(db, users):
    alice, bob = users
    problem = await _problem(db, alice)
    a = await _solution(db, bob, problem.id)
    b = await _solution(db, bob, problem.id)

    await crud.accept_solution(db, a)
    b = await crud.accept_solution(db, await crud.get_solution(db, b.id))
    assert b.is_accepted is True
    assert (await crud.get_solution(db, a.id)).is_accepted is False
    assert await _count_accepted(db, problem.id) == 1


async def test_accept_does_not_touch_other_problems(db, users):
    alice, bob = users
    first = await _problem(db, alice)
    second = await _problem(db, alice, title="Another streetlight")
    s1 = await _solution(db, bob, first.id)
    s2 = await _solution(db, bob, second.id)

    await crud.accept_solution(db, s1)
    await crud.accept_solution(db, await crud.get_solution(db, s2.id))
    assert await _count_accepted(db, first.id) == 1
    assert await _count_accepted(db, second.id) == 1


async def test_delete_problem_cascades(db, users):
    alice, bob = users
    problem = await _problem(db, alice)
    solution = await _solution(db, bob, problem.id)
    solution = await crud.vote_on_solution(db, solution, alice, "upvote")
    await crud.add_comment(db, solution, alice, "Thanks, looks doable")

    removed = await crud.delete_problem(db, await crud.get_problem(db, problem.id))
    assert removed == 1
    assert await crud.get_problem(db, problem.id) is None
    assert await crud.get_solution(db, solution.id) is None


async def test_comments_append_in_order(db, users):
    alice, bob = users
    problem = await _problem(db, alice)
    solution = await _solution(db, bob, problem.id)

    first = await crud.add_comment(db, solution, alice, "First")
    second = await crud.add_comment(db, await crud.get_solution(db, solution.id), bob, "Second")
    assert first.author.name == "Alice"
    assert second.author.name == "Bob"

    solution = await crud.get_solution(db, solution.id)
    assert [c.text for c in solution.comments] == ["First", "Second"]
    assert solution.comment_count == 2


async def test_comment_is_logged(db, users, caplog):
    alice, bob = users
    problem = await _problem(db, alice)
    solution = await _solution(db, bob, problem.id)

    caplog.set_level(logging.INFO, logger="civichub.db.crud")
    comment = await crud.add_comment(db, solution, alice, "On it")
    assert f"Comment {comment.id} added to solution {solution.id}" in caplog.text


async def test_timestamps_load_as_utc(db, users):
    alice, _ = users
    problem = await _problem(db, alice)

    fetched = await crud.reload_problem(db, problem.id)
    assert fetched.created_at.utcoffset() == timedelta(0)
    assert fetched.updated_at.utcoffset() == timedelta(0)
