"""Service layer for group membership and administration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from circlefeed.core.constants import (
    CREATED_AT,
    DELETED_GROUP,
    GROUPS_COLLECTION,
    UPDATED_AT,
)
from circlefeed.core.documents import batch_fetch, snapshot_to_dict, utcnow
from circlefeed.errors import ErrorKind, error

from .models import Group, GroupQuery

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from circlefeed.user.services import UserDirectory


class Membership:
    """Owns group identity, the admin and the member roster."""

    def __init__(self, db: Client, users: UserDirectory) -> None:
        self.db = db
        self.users = users
        self.groups = db.collection(GROUPS_COLLECTION)

    def create(self, admin: str, name: str) -> Group:
        """Create a group administered by ``admin`` with an empty roster."""
        if not name:
            raise error(ErrorKind.GROUP_NAME_EMPTY)
        if self._find_by_name(name) is not None:
            raise error(ErrorKind.DUPLICATE_GROUP_NAME, name=name)

        now = utcnow()
        _, group_ref = self.groups.add(
            {
                "name": name,
                "admin": admin,
                "members": [],
                CREATED_AT: now,
                UPDATED_AT: now,
            }
        )
        current_app.logger.info(f"Group {group_ref.id} ({name}) created by {admin}")
        return cast(Group, self.get_group(group_ref.id))

    def get_group(self, group_id: str) -> Group | None:
        """Fetch a group by id."""
        doc = cast("DocumentSnapshot", self.groups.document(group_id).get())
        return cast("Group | None", snapshot_to_dict(doc))

    def is_admin(self, user: str, group_id: str) -> None:
        """Raise unless ``user`` administers the group."""
        group = self.get_group(group_id)
        if group is None:
            raise error(ErrorKind.GROUP_NOT_FOUND, group=group_id)
        if group.get("admin") != user:
            raise error(ErrorKind.NOT_GROUP_ADMIN, user=user, group=group_id)

    def get_groups(self, query: GroupQuery | None = None) -> list[Group]:
        """Read groups matching ``query``, most recently updated first."""
        query = query or GroupQuery()
        groups_query: Any = self.groups
        if query.by_admin is not None:
            groups_query = groups_query.where(
                filter=firestore.FieldFilter("admin", "==", query.by_admin)
            )
        if query.by_name is not None:
            groups_query = groups_query.where(
                filter=firestore.FieldFilter("name", "==", query.by_name)
            )
        if query.by_member_id is not None:
            groups_query = groups_query.where(
                filter=firestore.FieldFilter(
                    "members", "array_contains", query.by_member_id
                )
            )
        groups_query = groups_query.order_by(
            UPDATED_AT, direction=firestore.Query.DESCENDING
        )
        results = []
        for doc in groups_query.stream():
            data = snapshot_to_dict(doc)
            if data is not None:
                results.append(cast(Group, data))
        return results

    def get_group_by_name(self, name: str, admin: str | None = None) -> Group:
        """Fetch a group by name, optionally checking that ``admin`` runs it."""
        group = self._find_by_name(name)
        if group is None:
            raise error(ErrorKind.NONEXISTENT_GROUP, group_name=name)
        if admin is not None:
            self.is_admin(admin, group["id"])
        return group

    def add_member(self, group_name: str, member_username: str) -> None:
        """Add a user, by username, to the named group."""
        group = self.get_group_by_name(group_name)
        member = self.users.get_user_by_username(member_username)
        if member["id"] in group.get("members", []):
            raise error(
                ErrorKind.DUPLICATE_MEMBER,
                member=member_username,
                group_name=group_name,
            )

        self.groups.document(group["id"]).update(
            {
                "members": firestore.ArrayUnion([member["id"]]),
                UPDATED_AT: utcnow(),
            }
        )
        current_app.logger.info(f"{member['id']} added to group {group['id']}")

    def delete_member(self, group_name: str, member_username: str) -> None:
        """Remove a user, by username, from the named group."""
        group = self.get_group_by_name(group_name)
        member = self.users.get_user_by_username(member_username)
        if member["id"] not in group.get("members", []):
            raise error(
                ErrorKind.NONEXISTENT_MEMBER,
                member=member_username,
                group_name=group_name,
            )

        self.groups.document(group["id"]).update(
            {
                "members": firestore.ArrayRemove([member["id"]]),
                UPDATED_AT: utcnow(),
            }
        )
        current_app.logger.info(f"{member['id']} removed from group {group['id']}")

    def edit_group_name(self, name: str, new_name: str) -> None:
        """Rename a group. The new name must be free."""
        if not name or not new_name:
            raise error(ErrorKind.GROUP_NAME_EMPTY)

        group = self.get_group_by_name(name)
        if new_name == name:
            return
        if self._find_by_name(new_name) is not None:
            raise error(ErrorKind.DUPLICATE_GROUP_NAME, name=new_name)

        self.groups.document(group["id"]).update(
            {"name": new_name, UPDATED_AT: utcnow()}
        )

    def delete(self, group_id: str) -> None:
        """Delete a group record.

        Posts still listing the id are left alone here; the route detaches
        them through Visibility first.
        """
        group_ref = self.groups.document(group_id)
        if not group_ref.get().exists:
            raise error(ErrorKind.NONEXISTENT_GROUP, group=group_id)

        group_ref.delete()
        current_app.logger.info(f"Group {group_id} deleted")

    def ids_to_group_names(self, ids: list[str]) -> list[str]:
        """Map ids to group names, keeping the input order and length.

        Ids that no longer resolve become ``DELETED_GROUP``.
        """
        groups = batch_fetch(self.db, GROUPS_COLLECTION, ids)
        return [groups.get(i, {}).get("name", DELETED_GROUP) for i in ids]

    def visible_group_ids(self, user: str) -> list[str]:
        """Ids of groups whose posts ``user`` may read.

        That is every group the user is a member of plus every group the user
        administers, since admins are not part of the roster.
        """
        ids = [g["id"] for g in self.get_groups(GroupQuery(by_member_id=user))]
        ids += [g["id"] for g in self.get_groups(GroupQuery(by_admin=user))]
        return list(dict.fromkeys(ids))

    def _find_by_name(self, name: str) -> Group | None:
        docs = list(
            self.groups.where(filter=firestore.FieldFilter("name", "==", name))
            .limit(1)
            .stream()
        )
        if not docs:
            return None
        return cast("Group | None", snapshot_to_dict(docs[0]))
