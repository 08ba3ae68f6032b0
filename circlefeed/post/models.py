"""Data models for the post blueprint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict

from circlefeed.core.types import FirestoreDocument


class PostOptions(TypedDict, total=False):
    """Display options attached to a post."""

    backgroundColor: str


class Post(FirestoreDocument, total=False):
    """A post document in Firestore."""

    author: str
    content: str
    groups: list[str]
    options: PostOptions


# Fields a generic update may touch. Author and groups change only through
# their own operations.
UPDATABLE_FIELDS = frozenset({"content", "options"})


@dataclass(frozen=True)
class PostQuery:
    """Filter for reading posts. Unset fields do not constrain the result.

    ``in_groups`` matches posts published to at least one of the ids; an
    empty tuple matches nothing.
    """

    by_author: str | None = None
    by_id: str | None = None
    in_groups: tuple[str, ...] | None = None
