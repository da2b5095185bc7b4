from __future__ import annotations

from sqlalchemy import String, Text, Float, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship, attribute_keyed_dict

from civichub.models.base import Base, ULIDMixin, UpdatedAtMixin
from civichub.models.vote import ProblemVote, VoteTallyMixin


class Problem(Base, ULIDMixin, UpdatedAtMixin, VoteTallyMixin):
    __tablename__ = "problems"

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    location: Mapped[str] = mapped_column(String(255))
    lat: Mapped[float] = mapped_column(Float)
    lng: Mapped[float] = mapped_column(Float)
    images: Mapped[list] = mapped_column(JSON, default=list)
    category: Mapped[str] = mapped_column(String(30), index=True)
    priority: Mapped[str] = mapped_column(String(20), default="Medium")  # Low | Medium | High | Critical
    status: Mapped[str] = mapped_column(String(20), default="Open", index=True)  # Open | In Progress | Resolved | Closed
    tags: Mapped[list] = mapped_column(JSON, default=list)
    author_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))

    author = relationship("User", lazy="selectin")
    votes: Mapped[dict[str, ProblemVote]] = relationship(
        ProblemVote,
        collection_class=attribute_keyed_dict("user_id"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def coordinates(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}
