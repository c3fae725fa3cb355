# core/access.py
"""
Ownership guard shared by books, mentor profiles, PYQs and blogs.

A resource may be mutated by its owner or by an admin. Callers look the
resource up first and raise NotFoundFailure when it is missing, so an
AuthorizationFailure always means "exists, but not yours".
"""
from dataclasses import dataclass
from typing import Optional

from core.errors import AuthorizationFailure
from models import Role


@dataclass(frozen=True)
class Actor:
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def can_mutate(actor: Actor, owner_id: Optional[int]) -> bool:
    return actor.is_admin or (owner_id is not None and actor.id == owner_id)


def ensure_can_mutate(actor: Actor, owner_id: Optional[int]) -> None:
    if not can_mutate(actor, owner_id):
        raise AuthorizationFailure()


def can_delete_comment(actor: Actor, comment_user_id: int, blog_author_id: int) -> bool:
    return can_mutate(actor, comment_user_id) or can_mutate(actor, blog_author_id)


def ensure_can_delete_comment(actor: Actor, comment_user_id: int, blog_author_id: int) -> None:
    if not can_delete_comment(actor, comment_user_id, blog_author_id):
        raise AuthorizationFailure()
