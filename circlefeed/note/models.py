"""Data models for the note blueprint."""

from circlefeed.core.types import FirestoreDocument


class Note(FirestoreDocument, total=False):
    """A note document in Firestore."""

    author: str
    note: str
    target: str


UPDATABLE_FIELDS = frozenset({"note"})
