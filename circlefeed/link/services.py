"""Service layer for links attached to posts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from circlefeed.core.constants import CREATED_AT, LINKS_COLLECTION, UPDATED_AT
from circlefeed.core.documents import newest_first, snapshot_to_dict, utcnow
from circlefeed.errors import ErrorKind, error

from .models import Link

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class Links:
    """External links attached to posts."""

    def __init__(self, db: Client) -> None:
        self.db = db
        self.links = db.collection(LINKS_COLLECTION)

    def create(
        self,
        author: str,
        url: str,
        display_text: str,
        target: str,
        paywall: bool = False,
    ) -> Link:
        """Attach a link to ``target``. The caller checks the post exists."""
        now = utcnow()
        _, link_ref = self.links.add(
            {
                "author": author,
                "url": url,
                "displayText": display_text,
                "target": target,
                "paywall": paywall,
                CREATED_AT: now,
                UPDATED_AT: now,
            }
        )
        current_app.logger.info(f"Link {link_ref.id} added to post {target}")
        return cast(Link, self.get_link(link_ref.id))

    def get_link(self, link_id: str) -> Link | None:
        doc = cast("DocumentSnapshot", self.links.document(link_id).get())
        return cast("Link | None", snapshot_to_dict(doc))

    def get_all(self) -> list[Link]:
        return cast(list[Link], newest_first(self._stream(self.links)))

    def get_by_author(self, author: str) -> list[Link]:
        return cast(list[Link], newest_first(self._by_field("author", author)))

    def get_by_target(self, target: str) -> list[Link]:
        return cast(list[Link], newest_first(self._by_field("target", target)))

    def delete(self, link_id: str) -> None:
        link_ref = self.links.document(link_id)
        if not link_ref.get().exists:
            raise error(ErrorKind.LINK_NOT_FOUND, link=link_id)
        link_ref.delete()

    def refs_by_target(self, target: str) -> list[Any]:
        """References to every link on ``target``, for batched deletes."""
        docs = self.links.where(
            filter=firestore.FieldFilter("target", "==", target)
        ).stream()
        return [doc.reference for doc in docs]

    def is_author(self, user: str, link_id: str) -> None:
        link = self.get_link(link_id)
        if link is None:
            raise error(ErrorKind.LINK_NOT_FOUND, link=link_id)
        if link.get("author") != user:
            raise error(ErrorKind.LINK_AUTHOR_MISMATCH, user=user, link=link_id)

    def _by_field(self, field: str, value: str) -> list[dict[str, Any]]:
        return self._stream(
            self.links.where(filter=firestore.FieldFilter(field, "==", value))
        )

    @staticmethod
    def _stream(query: Any) -> list[dict[str, Any]]:
        results = [snapshot_to_dict(doc) for doc in query.stream()]
        return [d for d in results if d is not None]
