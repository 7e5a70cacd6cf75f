import unittest

from sqlalchemy.orm import sessionmaker

from inventory_tracker.database import build_engine, get_db
from inventory_tracker.main import app

from support import ApiHarness, make_settings


class HealthApiTest(unittest.TestCase):
    def setUp(self):
        self.harness = ApiHarness()

    def tearDown(self):
        self.harness.close()

    def test_health_reports_database(self):
        response = self.harness.client.get("/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "ok")
        self.assertEqual(body["environment"], "test")


class StorageFailureApiTest(unittest.TestCase):
    """A database without tables makes every query fail."""

    def setUp(self):
        self.harness = ApiHarness()
        self.empty_engine = build_engine("sqlite:///:memory:")
        factory = sessionmaker(bind=self.empty_engine)

        def _broken_db():
            db = factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _broken_db

    def tearDown(self):
        self.harness.close()
        self.empty_engine.dispose()

    def test_detail_is_shown_outside_production(self):
        response = self.harness.client.get("/check-username/alice")
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("error", body)

    def test_detail_is_hidden_in_production(self):
        self.harness.settings = make_settings(ENVIRONMENT="production")
        response = self.harness.client.get("/check-email/a@x.com")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Server error"})


if __name__ == "__main__":
    unittest.main()
