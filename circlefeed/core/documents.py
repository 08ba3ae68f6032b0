"""Helpers shared by the services that read and write Firestore documents."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from .constants import FIRESTORE_IN_LIMIT, UPDATED_AT

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

T = TypeVar("T")


def utcnow() -> datetime.datetime:
    """Timestamp used for createdAt/updatedAt fields."""
    return datetime.datetime.now(datetime.timezone.utc)


def snapshot_to_dict(doc: DocumentSnapshot) -> dict[str, Any] | None:
    """Return the document data with its id, or None if it does not exist."""
    if not doc.exists:
        return None
    data = doc.to_dict()
    if data is None:
        return None
    data["id"] = doc.id
    return data


def chunked(items: Sequence[T], size: int = FIRESTORE_IN_LIMIT) -> Iterator[list[T]]:
    """Split ``items`` into lists of at most ``size`` for Firestore 'in' queries."""
    for i in range(0, len(items), size):
        yield list(items[i : i + size])


def newest_first(docs: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Sort documents by their last update, most recent first."""
    epoch = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)
    return sorted(docs, key=lambda d: d.get(UPDATED_AT) or epoch, reverse=True)


def batch_fetch(db: Client, collection: str, ids: Iterable[str]) -> dict[str, Any]:
    """Batch fetch documents by id and return a map of id to data."""
    unique_ids = list(dict.fromkeys(i for i in ids if i))
    if not unique_ids:
        return {}

    refs = [db.collection(collection).document(i) for i in unique_ids]
    results = {}
    for doc in db.get_all(refs):
        data = snapshot_to_dict(doc)
        if data is not None:
            results[doc.id] = data
    return results
