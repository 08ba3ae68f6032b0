"""Service layer for friend requests and friendships."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app
from google.api_core.exceptions import AlreadyExists

from circlefeed.core.constants import (
    CREATED_AT,
    FRIENDSHIPS_COLLECTION,
    STATUS_ACCEPTED,
    STATUS_PENDING,
    UPDATED_AT,
)
from circlefeed.core.documents import newest_first, snapshot_to_dict, utcnow
from circlefeed.errors import AppError, ErrorKind, error

from .models import Friendship, pair_id

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class FriendGraph:
    """Pairwise relationship between users: none, pending or friends.

    Each pair of users has at most one document, so a pending request and a
    friendship can never exist side by side.
    """

    def __init__(self, db: Client) -> None:
        self.db = db
        self.friendships = db.collection(FRIENDSHIPS_COLLECTION)

    def send_request(self, sender: str, recipient: str) -> None:
        """none -> pending(sender -> recipient)."""
        if sender == recipient:
            raise error(ErrorKind.SELF_FRIEND_REQUEST, user=sender)

        existing = self._get_pair(sender, recipient)
        if existing is not None:
            raise _pair_taken(existing, sender, recipient)

        now = utcnow()
        try:
            # create() fails if the pair document appeared since the read.
            self.friendships.document(pair_id(sender, recipient)).create(
                {
                    "users": sorted([sender, recipient]),
                    "from": sender,
                    "to": recipient,
                    "status": STATUS_PENDING,
                    CREATED_AT: now,
                    UPDATED_AT: now,
                }
            )
        except AlreadyExists as e:
            current_app.logger.warning(
                f"Friend request from {sender} to {recipient} lost a race: {e}"
            )
            raise _pair_taken(
                self._get_pair(sender, recipient), sender, recipient
            ) from e
        current_app.logger.info(f"Friend request sent from {sender} to {recipient}")

    def remove_request(self, sender: str, recipient: str) -> None:
        """pending(sender -> recipient) -> none, withdrawn by the sender."""
        self._pending_request(sender, recipient)
        self.friendships.document(pair_id(sender, recipient)).delete()
        current_app.logger.info(
            f"Friend request from {sender} to {recipient} withdrawn"
        )

    def accept_request(self, sender: str, recipient: str) -> None:
        """pending(sender -> recipient) -> friends.

        ``sender`` is the user who asked; ``recipient`` is the one accepting.
        """
        self._pending_request(sender, recipient)
        self.friendships.document(pair_id(sender, recipient)).update(
            {"status": STATUS_ACCEPTED, UPDATED_AT: utcnow()}
        )
        current_app.logger.info(f"{recipient} accepted friend request from {sender}")

    def reject_request(self, sender: str, recipient: str) -> None:
        """pending(sender -> recipient) -> none, declined by the recipient."""
        self._pending_request(sender, recipient)
        self.friendships.document(pair_id(sender, recipient)).delete()
        current_app.logger.info(f"{recipient} rejected friend request from {sender}")

    def remove_friend(self, user1: str, user2: str) -> None:
        """friends -> none."""
        existing = self._get_pair(user1, user2)
        if existing is None or existing.get("status") != STATUS_ACCEPTED:
            raise error(ErrorKind.FRIEND_NOT_FOUND, user1=user1, user2=user2)
        self.friendships.document(pair_id(user1, user2)).delete()
        current_app.logger.info(f"{user1} and {user2} are no longer friends")

    def get_friends(self, user: str) -> list[str]:
        """Ids of every user who is friends with ``user``."""
        return [
            _other(f, user) for f in self._for_user(user, STATUS_ACCEPTED)
        ]

    def get_requests(self, user: str) -> list[Friendship]:
        """Pending requests where ``user`` is the sender or the recipient."""
        return self._for_user(user, STATUS_PENDING)

    def _pending_request(self, sender: str, recipient: str) -> Friendship:
        existing = self._get_pair(sender, recipient)
        if (
            existing is None
            or existing.get("status") != STATUS_PENDING
            or existing.get("from") != sender
            or existing.get("to") != recipient
        ):
            raise error(
                ErrorKind.FRIEND_REQUEST_NOT_FOUND, sender=sender, recipient=recipient
            )
        return existing

    def _get_pair(self, user1: str, user2: str) -> Friendship | None:
        doc = cast(
            "DocumentSnapshot",
            self.friendships.document(pair_id(user1, user2)).get(),
        )
        return cast("Friendship | None", snapshot_to_dict(doc))

    def _for_user(self, user: str, status: str) -> list[Friendship]:
        query: Any = self.friendships.where(
            filter=firestore.FieldFilter("users", "array_contains", user)
        ).where(filter=firestore.FieldFilter("status", "==", status))
        results = [snapshot_to_dict(doc) for doc in query.stream()]
        return cast(
            list[Friendship], newest_first(d for d in results if d is not None)
        )


def _pair_taken(
    existing: Friendship | None, sender: str, recipient: str
) -> AppError:
    """The error for a send that found the pair document already in place."""
    if existing is not None and existing.get("status") == STATUS_ACCEPTED:
        return error(ErrorKind.ALREADY_FRIENDS, user1=sender, user2=recipient)
    found: dict[str, Any] = dict(existing or {})
    return error(
        ErrorKind.FRIEND_REQUEST_ALREADY_EXISTS,
        sender=found.get("from", sender),
        recipient=found.get("to", recipient),
    )


def _other(friendship: Friendship, user: str) -> str:
    first, second = friendship["users"]
    return second if first == user else first
