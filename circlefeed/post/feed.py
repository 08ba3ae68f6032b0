"""What a user may read: authored posts plus posts in the user's groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from circlefeed.core.documents import newest_first

from .models import Post, PostQuery

if TYPE_CHECKING:
    from circlefeed.group.services import Membership

    from .services import Visibility


def visible_posts(
    membership: Membership,
    visibility: Visibility,
    user: str,
    author: str | None = None,
) -> list[Post]:
    """Posts ``user`` may see, optionally only those written by ``author``.

    A post is visible when the user wrote it or belongs to (or administers)
    at least one group it is published to. Membership is read on every call,
    so joining or leaving a group takes effect on the next read.
    """
    if author == user:
        return visibility.get_posts(PostQuery(by_author=user))

    group_ids = tuple(membership.visible_group_ids(user))
    if author is not None:
        return visibility.get_posts(PostQuery(by_author=author, in_groups=group_ids))

    posts = {p["id"]: p for p in visibility.get_posts(PostQuery(in_groups=group_ids))}
    for post in visibility.get_posts(PostQuery(by_author=user)):
        posts[post["id"]] = post
    return cast(list[Post], newest_first(posts.values()))
