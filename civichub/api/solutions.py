from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from civichub.db import crud
from civichub.db.engine import get_db
from civichub.dependencies import require_auth, pagination, Pagination
from civichub.errors import NotFoundError
from civichub.schemas import (
    SolutionCreate, SolutionUpdate, SolutionRead, SolutionList,
    CommentCreate, CommentRead, AcceptResponse,
    VoteRequest, VoteTally, MessageResponse,
)
from civichub.services.auth import AuthContext
from civichub.services.permissions import ensure_author
from civichub.services.votes import tally

router = APIRouter(prefix="/api/solutions", tags=["solutions"])


async def _load_solution(db: AsyncSession, solution_id: str):
    solution = await crud.get_solution(db, solution_id)
    if not solution:
        raise NotFoundError("Solution not found")
    return solution


@router.get("", response_model=SolutionList)
async def list_solutions(
    problem_id: str | None = Query(None, alias="problemId"),
    paging: Pagination = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
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


@router.get("/{solution_id}", response_model=SolutionRead)
async def get_solution(
    solution_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await _load_solution(db, solution_id)


@router.post("", response_model=SolutionRead, status_code=201)
async def create_solution(
    body: SolutionCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    problem = await crud.get_problem(db, body.problem)
    if not problem:
        raise NotFoundError("Problem not found")
    return await crud.create_solution(
        db,
        author_id=auth.user_id,
        problem_id=problem.id,
        description=body.description,
        images=body.images,
        resources=[r.model_dump() for r in body.resources],
        estimated_cost=body.estimated_cost,
        estimated_time=body.estimated_time,
        difficulty=body.difficulty,
    )


@router.put("/{solution_id}", response_model=SolutionRead)
async def update_solution(
    solution_id: str,
    body: SolutionUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    solution = await _load_solution(db, solution_id)
    ensure_author(auth, solution.author_id, "Not authorized to update this solution")
    return await crud.update_solution(db, solution, **body.model_dump(exclude_unset=True))


@router.delete("/{solution_id}", response_model=MessageResponse)
async def delete_solution(
    solution_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    solution = await _load_solution(db, solution_id)
    ensure_author(auth, solution.author_id, "Not authorized to delete this solution")
    await crud.delete_solution(db, solution)
    return {"message": "Solution deleted successfully"}


@router.post("/{solution_id}/vote", response_model=VoteTally)
async def vote_solution(
    solution_id: str,
    body: VoteRequest,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    solution = await _load_solution(db, solution_id)
    solution = await crud.vote_on_solution(db, solution, auth.user_id, body.vote_type)
    return tally(solution)


@router.post("/{solution_id}/comments", response_model=CommentRead, status_code=201)
async def add_comment(
    solution_id: str,
    body: CommentCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    solution = await _load_solution(db, solution_id)
    return await crud.add_comment(db, solution, auth.user_id, body.text)


@router.put("/{solution_id}/accept", response_model=AcceptResponse)
async def accept_solution(
    solution_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """Accept a solution; only the problem's author may do this."""
    solution = await _load_solution(db, solution_id)
    ensure_author(auth, solution.problem.author_id, "Only the problem author can accept solutions")
    solution = await crud.accept_solution(db, solution)
    return {"message": "Solution accepted successfully", "solution": solution}
