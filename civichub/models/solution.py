from __future__ import annotations

from sqlalchemy import String, Text, Float, Boolean, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship, attribute_keyed_dict

from civichub.models.base import Base, ULIDMixin, UpdatedAtMixin
from civichub.models.vote import SolutionVote, VoteTallyMixin


class Comment(Base, ULIDMixin):
    """Append-only discussion entry on a solution."""

    __tablename__ = "comments"

    solution_id: Mapped[str] = mapped_column(String(26), ForeignKey("solutions.id"), index=True)
    author_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    text: Mapped[str] = mapped_column(Text)

    author = relationship("User", lazy="selectin")


class Solution(Base, ULIDMixin, UpdatedAtMixin, VoteTallyMixin):
    __tablename__ = "solutions"

    description: Mapped[str] = mapped_column(Text)
    images: Mapped[list] = mapped_column(JSON, default=list)
    resources: Mapped[list] = mapped_column(JSON, default=list)  # [{name, url, type}]
    estimated_cost: Mapped[float] = mapped_column(Float, default=0)
    estimated_time: Mapped[str] = mapped_column(String(10), default="Days")  # Hours | Days | Weeks | Months
    difficulty: Mapped[str] = mapped_column(String(10), default="Medium")  # Easy | Medium | Hard
    is_accepted: Mapped[bool] = mapped_column(Boolean, default=False)
    author_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    problem_id: Mapped[str] = mapped_column(String(26), ForeignKey("problems.id"), index=True)

    author = relationship("User", lazy="selectin")
    problem = relationship("Problem", lazy="selectin")
    votes: Mapped[dict[str, SolutionVote]] = relationship(
        SolutionVote,
        collection_class=attribute_keyed_dict("user_id"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments: Mapped[list[Comment]] = relationship(
        Comment,
        cascade="all, delete-orphan",
        order_by=(Comment.created_at, Comment.id),
        lazy="selectin",
    )

    @property
    def comment_count(self) -> int:
        return len(self.comments)
