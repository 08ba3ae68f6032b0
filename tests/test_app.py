"""Tests for the app factory."""

import unittest
from unittest.mock import patch

from circlefeed import create_app
from circlefeed.utils import EXTENSION_KEY
from tests.mock_utils import add_user, make_db


class AppFactoryTestCase(unittest.TestCase):
    """Test case for the app factory."""

    @patch("firebase_admin.initialize_app")
    @patch("firebase_admin.firestore.client")
    def test_testing_skips_firebase_init(self, mock_firestore_client, mock_init_app):
        """In testing mode no Firebase app is initialized."""
        app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})

        mock_init_app.assert_not_called()
        mock_firestore_client.assert_called_once()
        self.assertIn(EXTENSION_KEY, app.extensions)

    def test_log_level_from_config(self):
        app = create_app({"TESTING": True, "LOG_LEVEL": "warning"}, db=make_db())
        self.assertEqual(app.logger.level, 30)

    def test_404_error_handler(self):
        """Unknown routes answer with a JSON body."""
        app = create_app({"TESTING": True}, db=make_db())

        with app.test_client() as client:
            response = client.get("/non_existent_page")
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.get_json(), {"msg": "Not found."})

    def test_405_error_handler(self):
        app = create_app(
            {"TESTING": True, "WTF_CSRF_ENABLED": False}, db=make_db()
        )

        with app.test_client() as client:
            response = client.put("/api/session")
            self.assertEqual(response.status_code, 405)
            self.assertEqual(response.get_json(), {"msg": "Method not allowed."})


class CsrfTestCase(unittest.TestCase):
    """Mutating requests need the token handed out by /api/session."""

    def setUp(self):
        self.db = make_db()
        add_user(self.db, "alice")
        self.app = create_app({"TESTING": True, "SECRET_KEY": "test"}, db=self.db)
        self.client = self.app.test_client()
        with self.client.session_transaction() as sess:
            sess["user_id"] = "alice"

    def test_post_without_token(self):
        response = self.client.post("/api/groups", json={"name": "climbers"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("session may have expired", response.get_json()["msg"])

    def test_post_with_token(self):
        token = self.client.get("/api/session").get_json()["csrf_token"]

        response = self.client.post(
            "/api/groups", json={"name": "climbers"}, headers={"X-CSRFToken": token}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["group"]["admin"], "alice")


if __name__ == "__main__":
    unittest.main()
