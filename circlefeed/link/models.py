"""Data models for the link blueprint."""

from circlefeed.core.types import FirestoreDocument


class Link(FirestoreDocument, total=False):
    """A link document in Firestore."""

    author: str
    url: str
    displayText: str
    target: str
    paywall: bool
