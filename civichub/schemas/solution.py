from __future__ import annotations
from datetime import datetime
from typing import Literal
from pydantic import Field
from civichub.schemas.base import RequestModel, ReadModel
from civichub.schemas.problem import ImageURL, ProblemRef
from civichub.schemas.user import UserSummary, VoterRead

EstimatedTime = Literal["Hours", "Days", "Weeks", "Months"]
Difficulty = Literal["Easy", "Medium", "Hard"]


class Resource(RequestModel):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    type: Literal["Document", "Video", "Link", "Tool"]


class SolutionCreate(RequestModel):
    description: str = Field(..., min_length=20)
    problem: str = Field(..., min_length=1, description="Problem id")
    images: list[ImageURL] = []
    resources: list[Resource] = []
    estimated_cost: float = Field(0, ge=0)
    estimated_time: EstimatedTime = "Days"
    difficulty: Difficulty = "Medium"


class SolutionUpdate(RequestModel):
    description: str | None = Field(None, min_length=20)
    images: list[ImageURL] | None = None
    resources: list[Resource] | None = None
    estimated_cost: float | None = Field(None, ge=0)
    estimated_time: EstimatedTime | None = None
    difficulty: Difficulty | None = None


class CommentCreate(RequestModel):
    text: str = Field(..., min_length=1, max_length=2000)


class CommentRead(ReadModel):
    id: str
    text: str
    author: UserSummary
    created_at: datetime


class ResourceRead(ReadModel):
    name: str
    url: str
    type: str


class SolutionRead(ReadModel):
    id: str
    description: str
    images: list[str] = []
    resources: list[ResourceRead] = []
    estimated_cost: float = 0
    estimated_time: str
    difficulty: str
    is_accepted: bool = False
    author: UserSummary
    problem: ProblemRef
    upvotes: list[VoterRead] = []
    downvotes: list[VoterRead] = []
    comments: list[CommentRead] = []
    upvote_count: int = 0
    downvote_count: int = 0
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime


class SolutionList(ReadModel):
    solutions: list[SolutionRead]
    total_pages: int
    current_page: int
    total: int


class AcceptResponse(ReadModel):
    message: str
    solution: SolutionRead
