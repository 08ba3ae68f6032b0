"""Base test cases shared by the service and route tests."""

from __future__ import annotations

import unittest

from circlefeed import create_app
from circlefeed.utils import get_concepts
from tests.mock_utils import add_user, make_db


class ConceptTestCase(unittest.TestCase):
    """Runs each test inside an app context backed by a fresh MockFirestore."""

    def setUp(self) -> None:
        self.db = make_db()
        self.app = create_app(
            {"TESTING": True, "WTF_CSRF_ENABLED": False, "SECRET_KEY": "test"},
            db=self.db,
        )
        self.app_context = self.app.app_context()
        self.app_context.push()
        self.concepts = get_concepts()

        self.alice = add_user(self.db, "alice")
        self.bob = add_user(self.db, "bob")
        self.carol = add_user(self.db, "carol")

    def tearDown(self) -> None:
        self.app_context.pop()


class RouteTestCase(ConceptTestCase):
    """Adds a test client and a way to log in as one of the seeded users."""

    def setUp(self) -> None:
        super().setUp()
        self.client = self.app.test_client()

    def login(self, user_id: str) -> None:
        with self.client.session_transaction() as sess:
            sess["user_id"] = user_id
