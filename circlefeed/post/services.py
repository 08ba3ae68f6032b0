"""Service layer for posts and the groups they are published to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from circlefeed.core.constants import (
    CREATED_AT,
    FIRESTORE_BATCH_LIMIT,
    POSTS_COLLECTION,
    UPDATED_AT,
)
from circlefeed.core.documents import chunked, newest_first, snapshot_to_dict, utcnow
from circlefeed.errors import ErrorKind, error
from circlefeed.group.models import GroupQuery

from .models import UPDATABLE_FIELDS, Post, PostOptions, PostQuery

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from circlefeed.group.services import Membership


class Visibility:
    """Owns posts and the set of groups each one is published to.

    Nothing here decides what a given user may read; callers intersect the
    results with the user's groups and authorship.
    """

    def __init__(self, db: Client, membership: Membership) -> None:
        self.db = db
        self.membership = membership
        self.posts = db.collection(POSTS_COLLECTION)

    def create(
        self,
        author: str,
        content: str,
        group_name: str | None = None,
        options: PostOptions | None = None,
    ) -> Post:
        """Create a post.

        Without ``group_name`` the post goes to every group the author
        administers; otherwise only to that group, which the author must run.
        """
        if not group_name:
            groups = self.membership.get_groups(GroupQuery(by_admin=author))
            add_to = [g["id"] for g in groups]
        else:
            group = self.membership.get_group_by_name(group_name, admin=author)
            add_to = [group["id"]]

        now = utcnow()
        _, post_ref = self.posts.add(
            {
                "author": author,
                "content": content,
                "options": options or {},
                "groups": add_to,
                CREATED_AT: now,
                UPDATED_AT: now,
            }
        )
        current_app.logger.info(
            f"Post {post_ref.id} created by {author} in {len(add_to)} group(s)"
        )
        return cast(Post, self.get_post(post_ref.id))

    def get_post(self, post_id: str) -> Post | None:
        """Fetch a post by id."""
        doc = cast("DocumentSnapshot", self.posts.document(post_id).get())
        return cast("Post | None", snapshot_to_dict(doc))

    def publish_to(self, post_id: str, group_id: str) -> None:
        """Add ``group_id`` to the post's groups. Publishing twice is an error."""
        post = self.get_post(post_id)
        if post is None:
            raise error(ErrorKind.NONEXISTENT_POST, post=post_id)
        if group_id in post.get("groups", []):
            raise error(ErrorKind.POST_ALREADY_PUBLISHED, post=post_id, group=group_id)
        if self.membership.get_group(group_id) is None:
            raise error(ErrorKind.NONEXISTENT_GROUP, group=group_id)

        self.posts.document(post_id).update(
            {"groups": firestore.ArrayUnion([group_id]), UPDATED_AT: utcnow()}
        )
        current_app.logger.info(f"Post {post_id} published to group {group_id}")

    def remove_group(self, post_id: str, group_id: str) -> None:
        """Detach ``group_id`` from the post."""
        carriers = list(
            self.posts.where(
                filter=firestore.FieldFilter("groups", "array_contains", group_id)
            )
            .limit(1)
            .stream()
        )
        if not carriers:
            raise error(ErrorKind.NONEXISTENT_GROUP, group=group_id)

        post = self.get_post(post_id)
        if post is None or group_id not in post.get("groups", []):
            raise error(ErrorKind.POST_NOT_PUBLISHED, post=post_id, group=group_id)

        self.posts.document(post_id).update(
            {"groups": firestore.ArrayRemove([group_id]), UPDATED_AT: utcnow()}
        )
        current_app.logger.info(f"Post {post_id} removed from group {group_id}")

    def get_posts(self, query: PostQuery | None = None) -> list[Post]:
        """Read posts matching ``query``, most recently updated first."""
        query = query or PostQuery()

        if query.by_id is not None:
            post = self.get_post(query.by_id)
            candidates = [post] if post is not None else []
            return [p for p in candidates if self._matches(p, query)]

        if query.in_groups is not None:
            found: dict[str, dict[str, Any]] = {}
            for chunk in chunked(list(query.in_groups)):
                posts_query: Any = self.posts.where(
                    filter=firestore.FieldFilter("groups", "array_contains_any", chunk)
                )
                for doc in posts_query.stream():
                    data = snapshot_to_dict(doc)
                    if data is not None and self._matches(cast(Post, data), query):
                        found[data["id"]] = data
            return cast(list[Post], newest_first(found.values()))

        posts_query = self.posts
        if query.by_author is not None:
            posts_query = posts_query.where(
                filter=firestore.FieldFilter("author", "==", query.by_author)
            )
        results = [snapshot_to_dict(doc) for doc in posts_query.stream()]
        return cast(list[Post], newest_first(d for d in results if d is not None))

    def update(self, post_id: str, partial: dict[str, Any]) -> None:
        """Apply an update limited to content and options."""
        for key in partial:
            if key not in UPDATABLE_FIELDS:
                raise error(ErrorKind.FIELD_NOT_UPDATABLE, field=key)
        self.posts.document(post_id).update({**partial, UPDATED_AT: utcnow()})

    def delete(self, post_id: str, batch: Any = None) -> None:
        """Delete a post record, or queue the delete on ``batch``."""
        post_ref = self.posts.document(post_id)
        if batch is not None:
            batch.delete(post_ref)
        else:
            post_ref.delete()

    def check_post_exists(self, post_id: str) -> None:
        """Raise unless the post exists."""
        if self.get_post(post_id) is None:
            raise error(ErrorKind.NONEXISTENT_POST, post=post_id)

    def is_author(self, user: str, post_id: str) -> Post:
        """Raise unless ``user`` wrote the post; return the post otherwise."""
        post = self.get_post(post_id)
        if post is None:
            raise error(ErrorKind.POST_NOT_FOUND, post=post_id)
        if post.get("author") != user:
            raise error(ErrorKind.POST_AUTHOR_MISMATCH, user=user, post=post_id)
        return post

    def detach_group_everywhere(self, group_id: str) -> int:
        """Remove ``group_id`` from every post that lists it."""
        docs = list(
            self.posts.where(
                filter=firestore.FieldFilter("groups", "array_contains", group_id)
            ).stream()
        )
        for chunk in chunked(docs, FIRESTORE_BATCH_LIMIT):
            batch = self.db.batch()
            for doc in chunk:
                batch.update(
                    doc.reference,
                    {"groups": firestore.ArrayRemove([group_id]), UPDATED_AT: utcnow()},
                )
            batch.commit()
        if docs:
            current_app.logger.info(
                f"Group {group_id} detached from {len(docs)} post(s)"
            )
        return len(docs)

    @staticmethod
    def _matches(post: Post, query: PostQuery) -> bool:
        if query.by_author is not None and post.get("author") != query.by_author:
            return False
        if query.in_groups is not None and not set(query.in_groups) & set(
            post.get("groups", [])
        ):
            return False
        return True
