"""Human readable messages for error kinds."""

from __future__ import annotations

from typing import Any

from .errors import ErrorKind

MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.GROUP_NOT_FOUND: "Group {group} does not exist!",
    ErrorKind.NONEXISTENT_GROUP: "A group named '{group}' does not exist!",
    ErrorKind.GROUP_NAME_EMPTY: "Group name must be non-empty!",
    ErrorKind.DUPLICATE_GROUP_NAME: "A group named '{name}' already exists!",
    ErrorKind.NOT_GROUP_ADMIN: "{user} is not the admin of {group}!",
    ErrorKind.DUPLICATE_MEMBER: "{member} is already in {group}!",
    ErrorKind.NONEXISTENT_MEMBER: "{member} is not a member of {group}!",
    ErrorKind.POST_NOT_FOUND: "Post {post} does not exist!",
    ErrorKind.NONEXISTENT_POST: "A post with this ID does not exist!",
    ErrorKind.POST_AUTHOR_MISMATCH: "{user} is not the author of post {post}!",
    ErrorKind.POST_ALREADY_PUBLISHED: "Post is already published to {group}!",
    ErrorKind.POST_NOT_PUBLISHED: "Post is not published to {group}!",
    ErrorKind.FIELD_NOT_UPDATABLE: "Cannot update '{field}' field!",
    ErrorKind.NOTE_NOT_FOUND: "Note {note} does not exist!",
    ErrorKind.NOTE_AUTHOR_MISMATCH: "{user} is not the author of note {note}!",
    ErrorKind.DUPLICATE_NOTE: "A note on this post already exists!",
    ErrorKind.LINK_NOT_FOUND: "Link {link} does not exist!",
    ErrorKind.LINK_AUTHOR_MISMATCH: "{user} is not the author of link {link}!",
    ErrorKind.FRIEND_REQUEST_NOT_FOUND: (
        "Friend request from {sender} to {recipient} does not exist!"
    ),
    ErrorKind.FRIEND_REQUEST_ALREADY_EXISTS: (
        "Friend request between {sender} and {recipient} already exists!"
    ),
    ErrorKind.ALREADY_FRIENDS: "{user1} and {user2} are already friends!",
    ErrorKind.FRIEND_NOT_FOUND: (
        "Friendship between {user1} and {user2} does not exist!"
    ),
    ErrorKind.SELF_FRIEND_REQUEST: "You cannot send a friend request to yourself!",
    ErrorKind.USER_NOT_FOUND: "User {username} does not exist!",
    ErrorKind.NOT_LOGGED_IN: "You must be logged in!",
    ErrorKind.MALFORMED_INPUT: "Invalid input: {fields}",
}


class _Blank(dict):
    """Format mapping that leaves unknown placeholders visible."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def render_message(kind: ErrorKind, payload: dict[str, Any] | None = None) -> str:
    """Render the message for ``kind`` with already-resolved payload values."""
    template = MESSAGES.get(kind, kind.value)
    return template.format_map(_Blank(payload or {}))
