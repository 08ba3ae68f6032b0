"""Service layer for notes attached to posts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from circlefeed.core.constants import CREATED_AT, NOTES_COLLECTION, UPDATED_AT
from circlefeed.core.documents import newest_first, snapshot_to_dict, utcnow
from circlefeed.errors import ErrorKind, error

from .models import UPDATABLE_FIELDS, Note

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class Notes:
    """Free-text notes, at most one per target post."""

    def __init__(self, db: Client) -> None:
        self.db = db
        self.notes = db.collection(NOTES_COLLECTION)

    def create(self, author: str, note: str, target: str) -> Note:
        """Attach a note to ``target``."""
        if self._by_field("target", target):
            raise error(ErrorKind.DUPLICATE_NOTE, post=target)

        now = utcnow()
        _, note_ref = self.notes.add(
            {
                "author": author,
                "note": note,
                "target": target,
                CREATED_AT: now,
                UPDATED_AT: now,
            }
        )
        current_app.logger.info(f"Note {note_ref.id} added to post {target}")
        return cast(Note, self.get_note(note_ref.id))

    def get_note(self, note_id: str) -> Note | None:
        doc = cast("DocumentSnapshot", self.notes.document(note_id).get())
        return cast("Note | None", snapshot_to_dict(doc))

    def get_all(self) -> list[Note]:
        return cast(list[Note], newest_first(self._stream(self.notes)))

    def get_by_author(self, author: str) -> list[Note]:
        return cast(list[Note], newest_first(self._by_field("author", author)))

    def get_by_target(self, target: str) -> list[Note]:
        return cast(list[Note], newest_first(self._by_field("target", target)))

    def update(self, note_id: str, partial: dict[str, Any]) -> None:
        """Change the text of a note."""
        for key in partial:
            if key not in UPDATABLE_FIELDS:
                raise error(ErrorKind.FIELD_NOT_UPDATABLE, field=key)
        if self.get_note(note_id) is None:
            raise error(ErrorKind.NOTE_NOT_FOUND, note=note_id)
        self.notes.document(note_id).update({**partial, UPDATED_AT: utcnow()})

    def delete(self, note_id: str) -> None:
        note_ref = self.notes.document(note_id)
        if not note_ref.get().exists:
            raise error(ErrorKind.NOTE_NOT_FOUND, note=note_id)
        note_ref.delete()

    def refs_by_target(self, target: str) -> list[Any]:
        """References to every note on ``target``, for batched deletes."""
        docs = self.notes.where(
            filter=firestore.FieldFilter("target", "==", target)
        ).stream()
        return [doc.reference for doc in docs]

    def is_author(self, user: str, note_id: str) -> None:
        note = self.get_note(note_id)
        if note is None:
            raise error(ErrorKind.NOTE_NOT_FOUND, note=note_id)
        if note.get("author") != user:
            raise error(ErrorKind.NOTE_AUTHOR_MISMATCH, user=user, note=note_id)

    def _by_field(self, field: str, value: str) -> list[dict[str, Any]]:
        return self._stream(
            self.notes.where(filter=firestore.FieldFilter(field, "==", value))
        )

    @staticmethod
    def _stream(query: Any) -> list[dict[str, Any]]:
        results = [snapshot_to_dict(doc) for doc in query.stream()]
        return [d for d in results if d is not None]
