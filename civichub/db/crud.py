"""CRUD operations for problems, solutions, votes and comments."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from sqlalchemy import Select, select, func, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from civichub.errors import ValidationError
from civichub.models import (
    User, Problem, ProblemVote, Solution, SolutionVote, Comment, UPVOTE, DOWNVOTE,
)
from civichub.services.votes import apply_vote

logger = logging.getLogger(__name__)


@dataclass
class Page:
    items: list
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


# ── Sorting ───────────────────────────────────────────────

def _vote_count(vote_cls, fk_col, owner_id_col, value: str):
    return (
        select(func.count(vote_cls.id))
        .where(fk_col == owner_id_col, vote_cls.value == value)
        .scalar_subquery()
    )


PROBLEM_SORTS = {
    "createdAt": lambda: Problem.created_at.desc(),
    "-createdAt": lambda: Problem.created_at.asc(),
    "updatedAt": lambda: Problem.updated_at.desc(),
    "upvoteCount": lambda: _vote_count(ProblemVote, ProblemVote.problem_id, Problem.id, UPVOTE).desc(),
    "downvoteCount": lambda: _vote_count(ProblemVote, ProblemVote.problem_id, Problem.id, DOWNVOTE).desc(),
    "title": lambda: Problem.title.asc(),
}

SOLUTION_SORTS = {
    "createdAt": lambda: Solution.created_at.desc(),
    "-createdAt": lambda: Solution.created_at.asc(),
    "upvoteCount": lambda: _vote_count(SolutionVote, SolutionVote.solution_id, Solution.id, UPVOTE).desc(),
    "downvoteCount": lambda: _vote_count(SolutionVote, SolutionVote.solution_id, Solution.id, DOWNVOTE).desc(),
    "commentCount": lambda: (
        select(func.count(Comment.id)).where(Comment.solution_id == Solution.id).scalar_subquery().desc()
    ),
    "estimatedCost": lambda: Solution.estimated_cost.desc(),
}


def _order_by(sorts: dict, sort_by: str, model):
    if sort_by not in sorts:
        raise ValidationError("sortBy", f"sortBy must be one of: {', '.join(sorts)}")
    return [sorts[sort_by](), model.created_at.desc(), model.id.desc()]


async def _paginate(db: AsyncSession, stmt: Select, order, page: int, limit: int) -> Page:
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    result = await db.execute(stmt.order_by(*order).offset((page - 1) * limit).limit(limit))
    return Page(items=list(result.scalars().all()), total=total or 0, page=page, limit=limit)


# ── Users ─────────────────────────────────────────────────

async def get_user(db: AsyncSession, user_id: str) -> User | None:
    return await db.get(User, user_id)


async def update_user(db: AsyncSession, user: User, **kwargs) -> User:
    for k, v in kwargs.items():
        if v is not None:
            setattr(user, k, v)
    await db.commit()
    await db.refresh(user)
    return user


# ── Problem ───────────────────────────────────────────────

async def create_problem(
    db: AsyncSession,
    author_id: str,
    title: str,
    description: str,
    location: str,
    lat: float,
    lng: float,
    images: list[str],
    category: str,
    priority: str = "Medium",
    tags: list[str] | None = None,
) -> Problem:
    problem = Problem(
        author_id=author_id, title=title, description=description,
        location=location, lat=lat, lng=lng, images=images,
        category=category, priority=priority, tags=tags or [],
    )
    db.add(problem)
    await db.commit()
    logger.info("Problem %s created by %s", problem.id, author_id)
    return await reload_problem(db, problem.id)


async def get_problem(db: AsyncSession, problem_id: str) -> Problem | None:
    return await db.get(Problem, problem_id)


async def reload_problem(db: AsyncSession, problem_id: str) -> Problem | None:
    """Fetch a fresh copy after a write so eager-loaded votes and authors are current."""
    db.expunge_all()
    return await db.get(Problem, problem_id)


async def list_problems(
    db: AsyncSession,
    category: str | None = None,
    status: str | None = None,
    sort_by: str = "createdAt",
    page: int = 1,
    limit: int = 10,
) -> Page:
    order = _order_by(PROBLEM_SORTS, sort_by, Problem)
    stmt = select(Problem)
    if category:
        stmt = stmt.where(Problem.category == category)
    if status:
        stmt = stmt.where(Problem.status == status)
    return await _paginate(db, stmt, order, page, limit)


async def update_problem(db: AsyncSession, problem: Problem, **kwargs) -> Problem:
    for k, v in kwargs.items():
        if v is not None:
            setattr(problem, k, v)
    await db.commit()
    logger.info("Problem %s updated: %s", problem.id, sorted(kwargs))
    return await reload_problem(db, problem.id)


async def delete_problem(db: AsyncSession, problem: Problem) -> int:
    """Delete a problem and every solution (with votes and comments) under it.

    Returns the number of solutions removed.
    """
    solution_ids = select(Solution.id).where(Solution.problem_id == problem.id)
    await db.execute(delete(SolutionVote).where(SolutionVote.solution_id.in_(solution_ids)))
    await db.execute(delete(Comment).where(Comment.solution_id.in_(solution_ids)))
    result = await db.execute(delete(Solution).where(Solution.problem_id == problem.id))
    await db.delete(problem)
    await db.commit()
    db.expunge_all()
    logger.info("Problem %s deleted with %d solutions", problem.id, result.rowcount)
    return result.rowcount


async def vote_on_problem(db: AsyncSession, problem: Problem, user_id: str, vote_type: str) -> Problem:
    if apply_vote(problem, user_id, vote_type, ProblemVote):
        await db.commit()
        logger.info("Problem %s vote by %s: %s", problem.id, user_id, vote_type)
    return await reload_problem(db, problem.id)


# ── Solution ──────────────────────────────────────────────

async def create_solution(
    db: AsyncSession,
    author_id: str,
    problem_id: str,
    description: str,
    images: list[str] | None = None,
    resources: list[dict] | None = None,
    estimated_cost: float = 0,
    estimated_time: str = "Days",
    difficulty: str = "Medium",
) -> Solution:
    solution = Solution(
        author_id=author_id, problem_id=problem_id, description=description,
        images=images or [], resources=resources or [],
        estimated_cost=estimated_cost, estimated_time=estimated_time,
        difficulty=difficulty,
    )
    db.add(solution)
    await db.commit()
    logger.info("Solution %s proposed for problem %s by %s", solution.id, problem_id, author_id)
    return await reload_solution(db, solution.id)


async def get_solution(db: AsyncSession, solution_id: str) -> Solution | None:
    return await db.get(Solution, solution_id)


async def reload_solution(db: AsyncSession, solution_id: str) -> Solution | None:
    db.expunge_all()
    return await db.get(Solution, solution_id)


async def list_solutions(
    db: AsyncSession,
    problem_id: str | None = None,
    sort_by: str = "createdAt",
    page: int = 1,
    limit: int = 10,
) -> Page:
    order = _order_by(SOLUTION_SORTS, sort_by, Solution)
    stmt = select(Solution)
    if problem_id:
        stmt = stmt.where(Solution.problem_id == problem_id)
    return await _paginate(db, stmt, order, page, limit)


async def update_solution(db: AsyncSession, solution: Solution, **kwargs) -> Solution:
    for k, v in kwargs.items():
        if v is not None:
            setattr(solution, k, v)
    await db.commit()
    logger.info("Solution %s updated: %s", solution.id, sorted(kwargs))
    return await reload_solution(db, solution.id)


async def delete_solution(db: AsyncSession, solution: Solution) -> None:
    await db.delete(solution)
    await db.commit()
    db.expunge_all()
    logger.info("Solution %s deleted", solution.id)


async def vote_on_solution(db: AsyncSession, solution: Solution, user_id: str, vote_type: str) -> Solution:
    if apply_vote(solution, user_id, vote_type, SolutionVote):
        await db.commit()
        logger.info("Solution %s vote by %s: %s", solution.id, user_id, vote_type)
    return await reload_solution(db, solution.id)


async def add_comment(db: AsyncSession, solution: Solution, author_id: str, text: str) -> Comment:
    comment = Comment(author_id=author_id, text=text)
    solution.comments.append(comment)
    await db.commit()
    comment_id = comment.id
    logger.info("Comment %s added to solution %s by %s", comment_id, solution.id, author_id)
    db.expunge_all()
    return await db.get(Comment, comment_id)


async def accept_solution(db: AsyncSession, solution: Solution) -> Solution:
    """Mark ``solution`` as the accepted answer for its problem.

    Clearing the siblings and setting the target commit together, so no reader
    ever sees two accepted solutions (or none) for the problem.
    """
    await db.execute(
        update(Solution)
        .where(Solution.problem_id == solution.problem_id, Solution.id != solution.id)
        .values(is_accepted=False)
    )
    await db.execute(
        update(Solution)
        .where(Solution.id == solution.id)
        .values(is_accepted=True)
    )
    await db.commit()
    logger.info("Solution %s accepted for problem %s", solution.id, solution.problem_id)
    return await reload_solution(db, solution.id)

