from __future__ import annotations

from civichub.errors import ForbiddenError
from civichub.services.auth import AuthContext


def is_author(auth: AuthContext, author_id: str) -> bool:
    return str(auth.user_id) == str(author_id)


def ensure_author(auth: AuthContext, author_id: str, message: str) -> None:
    """Raise 403 unless the acting user is the stored author."""
    if not is_author(auth, author_id):
        raise ForbiddenError(message)
