import unittest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from sqlalchemy import delete, func, select

from inventory_tracker.core.tokens import issue_token
from inventory_tracker.models.account import Account

from support import ApiHarness, auth_headers, make_settings


class RegisterApiTest(unittest.TestCase):
    def setUp(self):
        self.harness = ApiHarness()
        self.client = self.harness.client

    def tearDown(self):
        self.harness.close()

    def _account_count(self):
        with self.harness.session_factory() as db:
            return db.execute(select(func.count(Account.id))).scalar_one()

    def test_register_then_duplicate_email(self):
        response = self.harness.register("alice", "a@x.com", "secret1")
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["username"], "alice")
        self.assertEqual(body["user"]["email"], "a@x.com")
        self.assertIn("createdAt", body["user"])
        self.assertNotIn("password", body["user"])
        self.assertNotIn("passwordHash", body["user"])
        self.assertNotIn("password_hash", response.text)

        again = self.harness.register("alice2", "A@x.com", "secret1")
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["field"], "email")
        self.assertFalse(again.json()["success"])
        self.assertEqual(self._account_count(), 1)

    def test_duplicate_username(self):
        self.harness.register("alice", "a@x.com")
        response = self.harness.register("alice", "other@x.com")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "username")

    def test_request_validation(self):
        cases = {
            "username": {"username": "al", "email": "a@x.com", "password": "secret1"},
            "email": {"username": "alice", "email": "not-an-email", "password": "secret1"},
            "password": {"username": "alice", "email": "a@x.com", "password": "123"},
        }
        for field, payload in cases.items():
            with self.subTest(field=field):
                response = self.client.post("/register", json=payload)
                self.assertEqual(response.status_code, 400)
                body = response.json()
                self.assertFalse(body["success"])
                self.assertIn(field, body["errors"])
        self.assertEqual(self._account_count(), 0)

    def test_missing_secret_is_a_server_error(self):
        self.harness.settings = make_settings(JWT_SECRET=None)
        response = self.harness.register()
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Server configuration error"})
        self.assertEqual(self._account_count(), 0)


class LoginApiTest(unittest.TestCase):
    def setUp(self):
        self.harness = ApiHarness()
        self.client = self.harness.client
        self.harness.register("alice", "a@x.com", "secret1")

    def tearDown(self):
        self.harness.close()

    def test_login_returns_token(self):
        response = self.client.post("/login", json={"email": "A@X.com", "password": "secret1"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["username"], "alice")

        verified = self.client.get("/verify", headers=auth_headers(body["token"]))
        self.assertEqual(verified.status_code, 200)

    def test_bad_credentials_share_one_response(self):
        wrong_password = self.client.post("/login", json={"email": "a@x.com", "password": "nope-nope"})
        unknown_email = self.client.post("/login", json={"email": "z@x.com", "password": "secret1"})
        self.assertEqual(wrong_password.status_code, 400)
        self.assertEqual(unknown_email.status_code, 400)
        self.assertEqual(wrong_password.json(), unknown_email.json())
        self.assertNotIn("field", wrong_password.json())

    def test_missing_secret_is_a_server_error(self):
        self.harness.settings = make_settings(JWT_SECRET="")
        response = self.client.post("/login", json={"email": "a@x.com", "password": "secret1"})
        self.assertEqual(response.status_code, 500)


class VerifyApiTest(unittest.TestCase):
    def setUp(self):
        self.harness = ApiHarness()
        self.client = self.harness.client
        self.token = self.harness.token_for()

    def tearDown(self):
        self.harness.close()

    def test_verify_returns_account(self):
        response = self.client.get("/verify", headers=auth_headers(self.token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["email"], "a@x.com")

    def test_missing_token(self):
        response = self.client.get("/verify")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"success": False, "message": "No authentication token, access denied"},
        )

    def test_invalid_token(self):
        response = self.client.get("/verify", headers=auth_headers(self.token + "x"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid authentication token")

    def test_expired_token(self):
        account = SimpleNamespace(id=1, username="alice", email="a@x.com")
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        expired = issue_token(account, settings=self.harness.settings, now=issued)
        response = self.client.get("/verify", headers=auth_headers(expired))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Token has expired, please login again")

    def test_account_removed_after_issue(self):
        with self.harness.session_factory() as db:
            db.execute(delete(Account))
            db.commit()
        response = self.client.get("/verify", headers=auth_headers(self.token))
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])


class AvailabilityApiTest(unittest.TestCase):
    def setUp(self):
        self.harness = ApiHarness()
        self.client = self.harness.client
        self.harness.register("alice", "a@x.com")

    def tearDown(self):
        self.harness.close()

    def test_check_email(self):
        taken = self.client.get("/check-email/A@x.com").json()
        free = self.client.get("/check-email/b@x.com").json()
        self.assertEqual(taken, {"success": True, "available": False, "email": "A@x.com"})
        self.assertTrue(free["available"])

    def test_check_username(self):
        self.assertFalse(self.client.get("/check-username/alice").json()["available"])
        self.assertTrue(self.client.get("/check-username/bob").json()["available"])


if __name__ == "__main__":
    unittest.main()
