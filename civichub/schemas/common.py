from __future__ import annotations
from typing import Literal
from pydantic import BaseModel
from civichub.schemas.base import RequestModel, ReadModel
from civichub.schemas.user import VoterRead

VoteType = Literal["upvote", "downvote", "remove"]


class VoteRequest(RequestModel):
    vote_type: VoteType


class VoteTally(ReadModel):
    upvotes: list[VoterRead] = []
    downvotes: list[VoterRead] = []
    upvote_count: int = 0
    downvote_count: int = 0


class MessageResponse(BaseModel):
    message: str
