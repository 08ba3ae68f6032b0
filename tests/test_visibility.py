"""Tests for the Visibility service and the feed built on top of it."""

from __future__ import annotations

import unittest

from circlefeed.errors import ErrorKind, NotAllowedError, NotFoundError
from circlefeed.post.feed import visible_posts
from circlefeed.post.models import PostQuery
from tests.helpers import ConceptTestCase


class TestVisibility(ConceptTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.groups = self.concepts.groups
        self.posts = self.concepts.posts
        self.climbers = self.groups.create(self.alice, "climbers")

    def test_create_without_group_goes_to_every_administered_group(self) -> None:
        runners = self.groups.create(self.alice, "runners")
        self.groups.create(self.bob, "swimmers")

        post = self.posts.create(self.alice, "hello")

        self.assertCountEqual(post["groups"], [self.climbers["id"], runners["id"]])
        self.assertEqual(post["author"], self.alice)
        self.assertEqual(post["options"], {})

    def test_create_in_named_group(self) -> None:
        self.groups.create(self.alice, "runners")

        post = self.posts.create(
            self.alice, "hello", "climbers", {"backgroundColor": "#fff"}
        )

        self.assertEqual(post["groups"], [self.climbers["id"]])
        self.assertEqual(post["options"], {"backgroundColor": "#fff"})

    def test_create_in_group_user_does_not_run(self) -> None:
        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.create(self.bob, "hello", "climbers")
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_GROUP_ADMIN)

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.create(self.bob, "hello", "runners")
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_GROUP)

    def test_create_without_any_group(self) -> None:
        post = self.posts.create(self.carol, "just me")
        self.assertEqual(post["groups"], [])

    def test_publish_to(self) -> None:
        post = self.posts.create(self.alice, "hello")
        runners = self.groups.create(self.alice, "runners")

        self.posts.publish_to(post["id"], runners["id"])
        self.assertCountEqual(
            self.posts.get_post(post["id"])["groups"],
            [self.climbers["id"], runners["id"]],
        )

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.publish_to(post["id"], runners["id"])
        self.assertEqual(ctx.exception.kind, ErrorKind.POST_ALREADY_PUBLISHED)

    def test_publish_to_missing_post_or_group(self) -> None:
        post = self.posts.create(self.carol, "hello")

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.publish_to("nope", self.climbers["id"])
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_POST)

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.publish_to(post["id"], "nope")
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_GROUP)

    def test_remove_group(self) -> None:
        published = self.posts.create(self.alice, "in climbers")
        unpublished = self.posts.create(self.carol, "nowhere")

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.remove_group(published["id"], "nope")
        self.assertEqual(ctx.exception.kind, ErrorKind.NONEXISTENT_GROUP)

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.remove_group(unpublished["id"], self.climbers["id"])
        self.assertEqual(ctx.exception.kind, ErrorKind.POST_NOT_PUBLISHED)

        self.posts.remove_group(published["id"], self.climbers["id"])
        self.assertEqual(self.posts.get_post(published["id"])["groups"], [])

    def test_update_only_allows_content_and_options(self) -> None:
        post = self.posts.create(self.alice, "hello")

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.update(post["id"], {"author": self.bob})
        self.assertEqual(ctx.exception.kind, ErrorKind.FIELD_NOT_UPDATABLE)
        self.assertEqual(ctx.exception.payload, {"field": "author"})

        self.posts.update(post["id"], {"content": "edited"})
        updated = self.posts.get_post(post["id"])
        self.assertEqual(updated["content"], "edited")
        self.assertEqual(updated["author"], self.alice)

    def test_is_author(self) -> None:
        post = self.posts.create(self.alice, "hello")

        self.assertEqual(self.posts.is_author(self.alice, post["id"])["id"], post["id"])

        with self.assertRaises(NotAllowedError) as ctx:
            self.posts.is_author(self.bob, post["id"])
        self.assertEqual(ctx.exception.kind, ErrorKind.POST_AUTHOR_MISMATCH)

        with self.assertRaises(NotFoundError) as ctx:
            self.posts.is_author(self.alice, "nope")
        self.assertEqual(ctx.exception.kind, ErrorKind.POST_NOT_FOUND)

    def test_get_posts_by_author_and_group(self) -> None:
        runners = self.groups.create(self.bob, "runners")
        alice_post = self.posts.create(self.alice, "alice")
        bob_post = self.posts.create(self.bob, "bob")

        by_author = self.posts.get_posts(PostQuery(by_author=self.bob))
        self.assertEqual([p["id"] for p in by_author], [bob_post["id"]])

        in_groups = self.posts.get_posts(
            PostQuery(in_groups=(self.climbers["id"], runners["id"]))
        )
        self.assertCountEqual(
            [p["id"] for p in in_groups], [alice_post["id"], bob_post["id"]]
        )

        by_id = self.posts.get_posts(
            PostQuery(by_id=alice_post["id"], by_author=self.bob)
        )
        self.assertEqual(by_id, [])

    def test_get_posts_most_recently_updated_first(self) -> None:
        first = self.posts.create(self.alice, "first")
        second = self.posts.create(self.alice, "second")
        self.posts.update(first["id"], {"content": "first, edited"})

        posts = self.posts.get_posts(PostQuery(by_author=self.alice))

        self.assertEqual([p["id"] for p in posts], [first["id"], second["id"]])

    def test_detach_group_everywhere(self) -> None:
        first = self.posts.create(self.alice, "first")
        second = self.posts.create(self.alice, "second")

        self.assertEqual(self.posts.detach_group_everywhere(self.climbers["id"]), 2)

        self.assertEqual(self.posts.get_post(first["id"])["groups"], [])
        self.assertEqual(self.posts.get_post(second["id"])["groups"], [])
        self.assertEqual(self.posts.detach_group_everywhere(self.climbers["id"]), 0)


class TestFeed(ConceptTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.groups = self.concepts.groups
        self.posts = self.concepts.posts
        self.groups.create(self.alice, "climbers")
        self.post = self.posts.create(self.alice, "crag day", "climbers")

    def feed_ids(self, user: str, author: str | None = None) -> list[str]:
        posts = visible_posts(self.groups, self.posts, user, author=author)
        return [p["id"] for p in posts]

    def test_author_sees_own_post(self) -> None:
        self.assertEqual(self.feed_ids(self.alice), [self.post["id"]])

    def test_visibility_follows_membership(self) -> None:
        self.assertEqual(self.feed_ids(self.bob), [])

        self.groups.add_member("climbers", "bob")
        self.assertEqual(self.feed_ids(self.bob), [self.post["id"]])

        self.groups.delete_member("climbers", "bob")
        self.assertEqual(self.feed_ids(self.bob), [])

    def test_unpublished_post_only_visible_to_author(self) -> None:
        lonely = self.posts.create(self.carol, "nobody sees this")

        self.assertEqual(self.feed_ids(self.carol), [lonely["id"]])
        self.assertNotIn(lonely["id"], self.feed_ids(self.alice))

    def test_filter_by_author(self) -> None:
        self.groups.add_member("climbers", "bob")
        self.posts.create(self.bob, "bob's own")

        self.assertEqual(self.feed_ids(self.bob, author=self.alice), [self.post["id"]])
        self.assertEqual(self.feed_ids(self.carol, author=self.alice), [])
        self.assertEqual(len(self.feed_ids(self.bob, author=self.bob)), 1)

    def test_detached_post_disappears_from_members_feed(self) -> None:
        self.groups.add_member("climbers", "bob")
        group = self.groups.get_group_by_name("climbers")

        self.posts.remove_group(self.post["id"], group["id"])

        self.assertEqual(self.feed_ids(self.bob), [])
        self.assertEqual(self.feed_ids(self.alice), [self.post["id"]])


if __name__ == "__main__":
    unittest.main()
