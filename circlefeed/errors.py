"""Error kinds raised by the concept services."""

from __future__ import annotations

import enum
from typing import Any


class ErrorFamily(enum.Enum):
    """Broad error categories, each mapped to an HTTP status code."""

    NOT_FOUND = 404
    NOT_ALLOWED = 403
    UNAUTHORIZED = 401


class ErrorKind(str, enum.Enum):
    """Every failure a concept can report.

    The value is the stable identifier clients see in the ``kind`` field of
    an error body.
    """

    # Groups
    GROUP_NOT_FOUND = "GroupNotFound"
    NONEXISTENT_GROUP = "NonexistentGroup"
    GROUP_NAME_EMPTY = "GroupNameEmpty"
    DUPLICATE_GROUP_NAME = "DuplicateGroupName"
    NOT_GROUP_ADMIN = "NotGroupAdmin"
    DUPLICATE_MEMBER = "DuplicateMember"
    NONEXISTENT_MEMBER = "NonexistentMember"

    # Posts
    POST_NOT_FOUND = "PostNotFound"
    NONEXISTENT_POST = "NonexistentPost"
    POST_AUTHOR_MISMATCH = "PostAuthorMismatch"
    POST_ALREADY_PUBLISHED = "PostAlreadyPublished"
    POST_NOT_PUBLISHED = "PostNotPublished"
    FIELD_NOT_UPDATABLE = "FieldNotUpdatable"

    # Notes and links
    NOTE_NOT_FOUND = "NoteNotFound"
    NOTE_AUTHOR_MISMATCH = "NoteAuthorMismatch"
    DUPLICATE_NOTE = "DuplicateNote"
    LINK_NOT_FOUND = "LinkNotFound"
    LINK_AUTHOR_MISMATCH = "LinkAuthorMismatch"

    # Friends
    FRIEND_REQUEST_NOT_FOUND = "FriendRequestNotFound"
    FRIEND_REQUEST_ALREADY_EXISTS = "FriendRequestAlreadyExists"
    ALREADY_FRIENDS = "AlreadyFriends"
    FRIEND_NOT_FOUND = "FriendNotFound"
    SELF_FRIEND_REQUEST = "SelfFriendRequest"

    # Users and requests
    USER_NOT_FOUND = "UserNotFound"
    NOT_LOGGED_IN = "NotLoggedIn"
    MALFORMED_INPUT = "MalformedInput"

    @property
    def family(self) -> ErrorFamily:
        return _FAMILIES.get(self, ErrorFamily.NOT_ALLOWED)

    @property
    def status_code(self) -> int:
        return self.family.value


_FAMILIES = {
    ErrorKind.GROUP_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.POST_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.NOTE_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.LINK_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.FRIEND_REQUEST_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.FRIEND_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.USER_NOT_FOUND: ErrorFamily.NOT_FOUND,
    ErrorKind.NOT_LOGGED_IN: ErrorFamily.UNAUTHORIZED,
}


class AppError(Exception):
    """Base application error class.

    Carries only the kind and the raw identifiers involved. Turning those
    identifiers into readable names happens in ``circlefeed.responses``.
    """

    def __init__(self, kind: ErrorKind, **payload: Any) -> None:
        """Initialize the error."""
        super().__init__(kind.value)
        self.kind = kind
        self.payload = payload

    @property
    def family(self) -> ErrorFamily:
        return self.kind.family

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value}, {self.payload!r})"


class NotFoundError(AppError):
    """Raised when a referenced entity does not exist."""


class NotAllowedError(AppError):
    """Raised when an operation would violate an invariant."""


def error(kind: ErrorKind, **payload: Any) -> AppError:
    """Build the error subclass matching the family of ``kind``."""
    if kind.family is ErrorFamily.NOT_FOUND:
        return NotFoundError(kind, **payload)
    if kind.family is ErrorFamily.NOT_ALLOWED:
        return NotAllowedError(kind, **payload)
    return AppError(kind, **payload)
