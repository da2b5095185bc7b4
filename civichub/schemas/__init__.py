"""Pydantic request/response schemas."""

from civichub.schemas.user import (
    RegisterRequest, LoginRequest, ProfileUpdate,
    UserSummary, VoterRead, UserRead, AuthResponse, MeResponse,
)
from civichub.schemas.common import VoteType, VoteRequest, VoteTally, MessageResponse
from civichub.schemas.problem import (
    Category, Priority, Status, Coordinates,
    ProblemCreate, ProblemUpdate, ProblemRead, ProblemRef, ProblemList,
)
from civichub.schemas.solution import (
    Resource, SolutionCreate, SolutionUpdate, SolutionRead, SolutionList,
    CommentCreate, CommentRead, AcceptResponse,
)

__all__ = [
    "RegisterRequest", "LoginRequest", "ProfileUpdate",
    "UserSummary", "VoterRead", "UserRead", "AuthResponse", "MeResponse",
    "VoteType", "VoteRequest", "VoteTally", "MessageResponse",
    "Category", "Priority", "Status", "Coordinates",
    "ProblemCreate", "ProblemUpdate", "ProblemRead", "ProblemRef", "ProblemList",
    "Resource", "SolutionCreate", "SolutionUpdate", "SolutionRead", "SolutionList",
    "CommentCreate", "CommentRead", "AcceptResponse",
]
