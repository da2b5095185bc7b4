"""Vote ledger: toggle one user's vote on a problem or solution."""

from __future__ import annotations

from typing import Callable

from civichub.errors import ValidationError
from civichub.models import UPVOTE, DOWNVOTE

REMOVE = "remove"
VOTE_TYPES = (UPVOTE, DOWNVOTE, REMOVE)


def apply_vote(entity, user_id: str, vote_type: str, make_vote: Callable[..., object]) -> bool:
    """Set ``user_id``'s vote on ``entity`` to ``vote_type``.

    ``entity.votes`` is a dict keyed by user id, so a user can hold at most one
    vote and repeating the same request changes nothing. ``make_vote`` builds
    a new ledger record (``ProblemVote`` or ``SolutionVote``).

    Returns True when the ledger changed.
    """
    if vote_type not in VOTE_TYPES:
        raise ValidationError("voteType", f"voteType must be one of: {', '.join(VOTE_TYPES)}")

    existing = entity.votes.get(user_id)
    if vote_type == REMOVE:
        if existing is None:
            return False
        del entity.votes[user_id]
        return True

    if existing is not None:
        if existing.value == vote_type:
            return False
        # flip in place; delete+insert would trip the unique constraint within one flush
        existing.value = vote_type
        return True

    entity.votes[user_id] = make_vote(user_id=user_id, value=vote_type)
    return True


def tally(entity) -> dict:
    return {
        "upvotes": entity.upvotes,
        "downvotes": entity.downvotes,
        "upvote_count": entity.upvote_count,
        "downvote_count": entity.downvote_count,
    }
