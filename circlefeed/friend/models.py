"""Data models for the friend blueprint."""

from __future__ import annotations

from typing import TypedDict

from circlefeed.core.types import FirestoreDocument

# "from" is a keyword, so the functional form is used.
_FriendshipFields = TypedDict(
    "_FriendshipFields",
    {"users": list, "from": str, "to": str, "status": str},
    total=False,
)


class Friendship(FirestoreDocument, _FriendshipFields, total=False):
    """One document per pair of users.

    ``users`` holds both ids sorted. While ``status`` is pending, ``from``
    and ``to`` give the direction of the request; they are kept after
    acceptance for the record.
    """


def pair_id(user1: str, user2: str) -> str:
    """Document id shared by both orderings of a pair."""
    low, high = sorted([user1, user2])
    return f"{low}__{high}"
