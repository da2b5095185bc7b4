"""SQLAlchemy ORM models."""

from civichub.models.base import Base
from civichub.models.user import User, UserSession
from civichub.models.vote import ProblemVote, SolutionVote, UPVOTE, DOWNVOTE
from civichub.models.problem import Problem
from civichub.models.solution import Solution, Comment

__all__ = [
    "Base", "User", "UserSession",
    "Problem", "ProblemVote",
    "Solution", "SolutionVote", "Comment",
    "UPVOTE", "DOWNVOTE",
]
