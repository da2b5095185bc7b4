from __future__ import annotations
from datetime import datetime
from typing import Annotated, Literal
from pydantic import BaseModel, Field
from civichub.schemas.base import RequestModel, ReadModel
from civichub.schemas.user import UserSummary, VoterRead

Category = Literal["Infrastructure", "Environment", "Social", "Technology", "Health", "Education", "Other"]
Priority = Literal["Low", "Medium", "High", "Critical"]
Status = Literal["Open", "In Progress", "Resolved", "Closed"]
ImageURL = Annotated[str, Field(min_length=1)]


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ProblemCreate(RequestModel):
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=20)
    location: str = Field(..., min_length=1, max_length=255)
    coordinates: Coordinates
    images: list[ImageURL] = Field(..., min_length=1)
    category: Category
    priority: Priority = "Medium"
    tags: list[str] = []


class ProblemUpdate(RequestModel):
    title: str | None = Field(None, min_length=5, max_length=200)
    description: str | None = Field(None, min_length=20)
    status: Status | None = None
    priority: Priority | None = None
    tags: list[str] | None = None


class ProblemRead(ReadModel):
    id: str
    title: str
    description: str
    location: str
    coordinates: Coordinates
    images: list[str]
    category: str
    priority: str
    status: str
    tags: list[str] = []
    author: UserSummary
    upvotes: list[VoterRead] = []
    downvotes: list[VoterRead] = []
    upvote_count: int = 0
    downvote_count: int = 0
    created_at: datetime
    updated_at: datetime


class ProblemRef(ReadModel):
    id: str
    title: str


class ProblemList(ReadModel):
    problems: list[ProblemRead]
    total_pages: int
    current_page: int
    total: int
