"""Vote ledgers: one record per (entity, user), keyed by user id on the parent."""

from __future__ import annotations

from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from civichub.models.base import Base, ULIDMixin

UPVOTE = "upvote"
DOWNVOTE = "downvote"


class ProblemVote(Base, ULIDMixin):
    __tablename__ = "problem_votes"
    __table_args__ = (UniqueConstraint("problem_id", "user_id", name="uq_problem_vote_user"),)

    problem_id: Mapped[str] = mapped_column(String(26), ForeignKey("problems.id"), index=True)
    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    value: Mapped[str] = mapped_column(String(10))  # upvote | downvote

    user = relationship("User", lazy="selectin")


class SolutionVote(Base, ULIDMixin):
    __tablename__ = "solution_votes"
    __table_args__ = (UniqueConstraint("solution_id", "user_id", name="uq_solution_vote_user"),)

    solution_id: Mapped[str] = mapped_column(String(26), ForeignKey("solutions.id"), index=True)
    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    value: Mapped[str] = mapped_column(String(10))  # upvote | downvote

    user = relationship("User", lazy="selectin")


class VoteTallyMixin:
    """Derived vote projections over a ``votes`` dict keyed by user id."""

    def _voters(self, value: str) -> list:
        return [v.user for v in self.votes.values() if v.value == value]

    @property
    def upvotes(self) -> list:
        return self._voters(UPVOTE)

    @property
    def downvotes(self) -> list:
        return self._voters(DOWNVOTE)

    @property
    def upvote_count(self) -> int:
        return sum(1 for v in self.votes.values() if v.value == UPVOTE)

    @property
    def downvote_count(self) -> int:
        return sum(1 for v in self.votes.values() if v.value == DOWNVOTE)
