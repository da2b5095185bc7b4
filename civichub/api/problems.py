from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from civichub.db import crud
from civichub.db.engine import get_db
from civichub.dependencies import require_auth, pagination, Pagination
from civichub.errors import NotFoundError
from civichub.schemas import (
    Category, Status,
    ProblemCreate, ProblemUpdate, ProblemRead, ProblemList,
    SolutionList, VoteRequest, VoteTally, MessageResponse,
)
from civichub.services.auth import AuthContext
from civichub.services.permissions import ensure_author
from civichub.services.votes import tally

router = APIRouter(prefix="/api/problems", tags=["problems"])


async def _load_problem(db: AsyncSession, problem_id: str):
    problem = await crud.get_problem(db, problem_id)
    if not problem:
        raise NotFoundError("Problem not found")
    return problem


@router.get("", response_model=ProblemList)
async def list_problems(
    category: Category | None = Query(None),
    status: Status | None = Query(None),
    paging: Pagination = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
    page = await crud.list_problems(
        db, category=category, status=status,
        sort_by=paging.sort_by, page=paging.page, limit=paging.limit,
    )
    return {
        "problems": page.items,
        "total_pages": page.total_pages,
        "current_page": page.page,
        "total": page.total,
    }


@router.get("/{problem_id}", response_model=ProblemRead)
async def get_problem(
    problem_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await _load_problem(db, problem_id)


@router.post("", response_model=ProblemRead, status_code=201)
async def create_problem(
    body: ProblemCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await crud.create_problem(
        db,
        author_id=auth.user_id,
        title=body.title,
        description=body.description,
        location=body.location,
        lat=body.coordinates.lat,
        lng=body.coordinates.lng,
        images=body.images,
        category=body.category,
        priority=body.priority,
        tags=body.tags,
    )


@router.put("/{problem_id}", response_model=ProblemRead)
async def update_problem(
    problem_id: str,
    body: ProblemUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    problem = await _load_problem(db, problem_id)
    ensure_author(auth, problem.author_id, "Not authorized to update this problem")
    return await crud.update_problem(db, problem, **body.model_dump(exclude_unset=True))


@router.delete("/{problem_id}", response_model=MessageResponse)
async def delete_problem(
    problem_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    problem = await _load_problem(db, problem_id)
    ensure_author(auth, problem.author_id, "Not authorized to delete this problem")
    await crud.delete_problem(db, problem)
    return {"message": "Problem deleted successfully"}


@router.post("/{problem_id}/vote", response_model=VoteTally)
async def vote_problem(
    problem_id: str,
    body: VoteRequest,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    problem = await _load_problem(db, problem_id)
    problem = await crud.vote_on_problem(db, problem, auth.user_id, body.vote_type)
    return tally(problem)


@router.get("/{problem_id}/solutions", response_model=SolutionList)
async def list_problem_solutions(
    problem_id: str,
    paging: Pagination = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
    await _load_problem(db, problem_id)
    page = await crud.list_solutions(
        db, problem_id=problem_id,
        sort_by=paging.sort_by, page=paging.page, limit=paging.limit,
    )
    return {
        "solutions": page.items,
        "total_pages": page.total_pages,
        "current_page": page.page,
        "total": page.total,
    }
