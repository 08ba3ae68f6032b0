"""Data models for the group blueprint."""

from __future__ import annotations

from dataclasses import dataclass

from circlefeed.core.types import FirestoreDocument


class Group(FirestoreDocument, total=False):
    """A group document in Firestore."""

    name: str
    admin: str
    members: list[str]


@dataclass(frozen=True)
class GroupQuery:
    """Filter for reading groups. Unset fields do not constrain the result."""

    by_admin: str | None = None
    by_name: str | None = None
    by_member_id: str | None = None
