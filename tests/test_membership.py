"""Tests for the Membership service."""

from __future__ import annotations

import unittest

from circlefeed.core.constants import DELETED_GROUP
from circlefeed.errors import ErrorKind, NotAllowedError, NotFoundError
from circlefeed.group.models import GroupQuery
from tests.helpers import ConceptTestCase


class TestMembership(ConceptTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.groups = self.concepts.groups

    def test_create_group(self) -> None:
        group = self.groups.create(self.alice, "climbers")

        self.assertEqual(group["name"], "climbers")
        self.assertEqual(group["admin"], self.alice)
        self.assertEqual(group["members"], [])
        self.assertIn("createdAt", group)

    def test_create_group_empty_name(self) -> None:
        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.create(self.alice, "")
        self.assertEqual(ctx.exception.kind, ErrorKind.GROUP_NAME_EMPTY)

    def test_create_group_duplicate_name(self) -> None:
        self.groups.create(self.alice, "climbers")
        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.create(self.bob, "climbers")
        self.assertEqual(ctx.exception.kind, ErrorKind.DUPLICATE_GROUP_NAME)
        self.assertEqual(ctx.exception.payload, {"name": "climbers"})

    def test_is_admin(self) -> None:
        group = self.groups.create(self.alice, "climbers")

        self.groups.is_admin(self.alice, group["id"])

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.is_admin(self.bob, group["id"])
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_GROUP_ADMIN)

    def test_is_admin_missing_group(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.groups.is_admin(self.alice, "nope")
        self.assertEqual(ctx.exception.kind, ErrorKind.GROUP_NOT_FOUND)
        self.assertEqual(ctx.exception.status_code, 404)

    def test_get_group_by_name(self) -> None:
        created = self.groups.create(self.alice, "climbers")

        self.assertEqual(self.groups.get_group_by_name("climbers")["id"], created["id"])
        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.get_group_by_name("climbers", admin=self.bob)
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_GROUP_ADMIN)

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.get_group_by_name("runners")
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_GROUP)

    def test_add_and_delete_member(self) -> None:
        group = self.groups.create(self.alice, "climbers")

        self.groups.add_member("climbers", "bob")
        self.assertEqual(self.groups.get_group(group["id"])["members"], [self.bob])

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.add_member("climbers", "bob")
        self.assertEqual(ctx.exception.kind, ErrorKind.DUPLICATE_MEMBER)

        self.groups.delete_member("climbers", "bob")
        self.assertEqual(self.groups.get_group(group["id"])["members"], [])

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.delete_member("climbers", "bob")
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_MEMBER)

    def test_add_unknown_user(self) -> None:
        self.groups.create(self.alice, "climbers")
        with self.assertRaises(NotFoundError) as ctx:
            self.groups.add_member("climbers", "mallory")
        self.assertEqual(ctx.exception.kind, ErrorKind.USER_NOT_FOUND)

    def test_edit_group_name(self) -> None:
        group = self.groups.create(self.alice, "climbers")
        self.groups.create(self.bob, "runners")

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.edit_group_name("climbers", "")
        self.assertEqual(ctx.exception.kind, ErrorKind.GROUP_NAME_EMPTY)

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.edit_group_name("climbers", "runners")
        self.assertEqual(ctx.exception.kind, ErrorKind.DUPLICATE_GROUP_NAME)

        self.groups.edit_group_name("climbers", "boulderers")
        self.assertEqual(self.groups.get_group(group["id"])["name"], "boulderers")
        with self.assertRaises(NotAllowedError):
            self.groups.get_group_by_name("climbers")

    def test_delete_group(self) -> None:
        group = self.groups.create(self.alice, "climbers")

        self.groups.delete(group["id"])
        self.assertIsNone(self.groups.get_group(group["id"]))

        with self.assertRaises(NotAllowedError) as ctx:
            self.groups.delete(group["id"])
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_GROUP)

    def test_ids_to_group_names_keeps_order_and_length(self) -> None:
        first = self.groups.create(self.alice, "climbers")
        second = self.groups.create(self.alice, "runners")

        names = self.groups.ids_to_group_names([second["id"], "gone", first["id"]])

        self.assertEqual(names, ["runners", DELETED_GROUP, "climbers"])
        self.assertEqual(self.groups.ids_to_group_names([]), [])

    def test_get_groups_by_query(self) -> None:
        climbers = self.groups.create(self.alice, "climbers")
        runners = self.groups.create(self.bob, "runners")
        self.groups.add_member("runners", "alice")

        by_admin = self.groups.get_groups(GroupQuery(by_admin=self.alice))
        self.assertEqual([g["id"] for g in by_admin], [climbers["id"]])

        by_member = self.groups.get_groups(GroupQuery(by_member_id=self.alice))
        self.assertEqual([g["id"] for g in by_member], [runners["id"]])

        by_name = self.groups.get_groups(
            GroupQuery(by_name="runners", by_admin=self.alice)
        )
        self.assertEqual(by_name, [])

    def test_visible_group_ids_include_administered_groups(self) -> None:
        climbers = self.groups.create(self.alice, "climbers")
        runners = self.groups.create(self.bob, "runners")
        self.groups.add_member("runners", "alice")

        visible = self.groups.visible_group_ids(self.alice)

        self.assertCountEqual(visible, [climbers["id"], runners["id"]])
        self.assertEqual(self.groups.visible_group_ids(self.carol), [])


if __name__ == "__main__":
    unittest.main()
