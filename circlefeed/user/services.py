"""Read-only lookups over the users collection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from circlefeed.core.constants import CREATED_AT, DELETED_USER, USERS_COLLECTION
from circlefeed.core.documents import batch_fetch, snapshot_to_dict
from circlefeed.errors import ErrorKind, error

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class UserDirectory:
    """Resolves user ids and usernames.

    Accounts and credentials are managed elsewhere; this class only reads.
    """

    def __init__(self, db: Client) -> None:
        self.db = db

    def get_user_by_id(self, user_id: str) -> dict[str, Any] | None:
        """Fetch a user by their ID."""
        user_ref = self.db.collection(USERS_COLLECTION).document(user_id)
        user_doc = cast("DocumentSnapshot", user_ref.get())
        return snapshot_to_dict(user_doc)

    def get_user_by_username(self, username: str) -> dict[str, Any]:
        """Fetch a user by username, raising if there is none."""
        docs = list(
            self.db.collection(USERS_COLLECTION)
            .where(filter=firestore.FieldFilter("username", "==", username))
            .limit(1)
            .stream()
        )
        if not docs:
            raise error(ErrorKind.USER_NOT_FOUND, username=username)
        return cast(dict[str, Any], snapshot_to_dict(docs[0]))

    def get_users(self) -> list[dict[str, Any]]:
        """Fetch all users, newest first, without private fields."""
        users_query = (
            self.db.collection(USERS_COLLECTION)
            .order_by(CREATED_AT, direction=firestore.Query.DESCENDING)
            .stream()
        )
        users = []
        for doc in users_query:
            data = snapshot_to_dict(doc)
            if data is not None:
                data.pop("password", None)
                users.append(data)
        return users

    def ids_to_usernames(self, ids: list[str]) -> list[str]:
        """Map ids to usernames, keeping the input order and length."""
        users = batch_fetch(self.db, USERS_COLLECTION, ids)
        return [users.get(i, {}).get("username", DELETED_USER) for i in ids]
