"""Conversions from stored documents to what API clients see.

Stored documents reference users and groups by id. This module is the only
place those ids become usernames and group names, both for successful
responses and for error messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .core.constants import DELETED_GROUP, DELETED_USER
from .errors import AppError
from .messages import render_message

if TYPE_CHECKING:
    from .friend.models import Friendship
    from .group.models import Group
    from .group.services import Membership
    from .link.services import Links
    from .post.models import Post
    from .user.services import UserDirectory

# Error payload keys holding user ids and group ids respectively.
USER_ID_KEYS = ("user", "user1", "user2", "sender", "recipient", "admin")
GROUP_ID_KEYS = ("group",)


class Responses:
    """Formats concept output for the frontend."""

    def __init__(
        self, users: UserDirectory, membership: Membership, links: Links
    ) -> None:
        self.users = users
        self.membership = membership
        self.links = links

    def post(self, post: Post | None) -> dict[str, Any] | None:
        """Replace the author id with a username and group ids with names."""
        if post is None:
            return None
        return self.posts([post])[0]

    def posts(self, posts: list[Post]) -> list[dict[str, Any]]:
        """Same as ``post`` for many posts.

        Authors are resolved in one batch. Group names and links are still
        looked up post by post.
        """
        authors = self.users.ids_to_usernames([p["author"] for p in posts])
        formatted = []
        for post, author in zip(posts, authors):
            formatted.append(
                {
                    **post,
                    "author": author,
                    "groups": self.membership.ids_to_group_names(
                        list(post.get("groups", []))
                    ),
                    "links": self.links.get_by_target(post["id"]),
                }
            )
        return formatted

    def group(self, group: Group | None) -> dict[str, Any] | None:
        """Replace the admin and member ids with usernames."""
        if group is None:
            return None
        return self.groups([group])[0]

    def groups(self, groups: list[Group]) -> list[dict[str, Any]]:
        admins = self.users.ids_to_usernames([g["admin"] for g in groups])
        return [
            {
                **group,
                "admin": admin,
                "members": self.users.ids_to_usernames(list(group.get("members", []))),
            }
            for group, admin in zip(groups, admins)
        ]

    def friend_requests(
        self, user: str, requests: list[Friendship]
    ) -> dict[str, list[dict[str, Any]]]:
        """Split pending requests by which side ``user`` is on."""
        senders = self.users.ids_to_usernames([r["from"] for r in requests])
        recipients = self.users.ids_to_usernames([r["to"] for r in requests])

        incoming, outgoing = [], []
        for request, sender, recipient in zip(requests, senders, recipients):
            formatted = {**request, "from": sender, "to": recipient}
            formatted.pop("users", None)
            if request["from"] == user:
                outgoing.append(formatted)
            else:
                incoming.append(formatted)
        return {"incoming": incoming, "outgoing": outgoing}

    def error_message(self, err: AppError) -> str:
        """Render ``err`` with user and group ids swapped for names."""
        return render_message(err.kind, self.resolve_payload(err.payload))

    def resolve_payload(self, payload: dict[str, Any]) -> dict[str, Any]:
        resolved = dict(payload)

        # An id that no longer resolves is shown as is, not as a sentinel.
        user_keys = [k for k in USER_ID_KEYS if k in payload]
        if user_keys:
            names = self.users.ids_to_usernames([payload[k] for k in user_keys])
            for key, name in zip(user_keys, names):
                if name != DELETED_USER:
                    resolved[key] = name

        group_keys = [k for k in GROUP_ID_KEYS if k in payload]
        if group_keys:
            names = self.membership.ids_to_group_names([payload[k] for k in group_keys])
            for key, name in zip(group_keys, names):
                if name != DELETED_GROUP:
                    resolved[key] = name

        if "group_name" in payload:
            resolved.setdefault("group", payload["group_name"])
        return resolved
