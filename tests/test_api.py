"""API tests: login/logout flow, route guard, role gate and catalog reference checks over HTTP."""

import unittest
from unittest.mock import patch

from vehiclevault.core.config import get_settings
from vehiclevault.core.errors import StoreUnavailableError
from vehiclevault.main import app
from vehiclevault.schemas.auth import Profile, UserStatus
from vehiclevault.services.credential_store import UserStore

from tests.helpers import login, make_client, make_session_factory, seed_user

API = "/api/v1"


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()
        self.client = make_client(self.factory)
        self.admin = seed_user(
            self.factory, email="ada@x.com", password="adminpw1", profile=Profile.ADMIN, full_name="Ada Admin"
        )
        self.tech = seed_user(self.factory, email="tech@x.com", password="secret1", full_name="Tom Tech")

    def tearDown(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()

    def login_admin(self) -> None:
        self.assertEqual(login(self.client, "ada@x.com", "adminpw1").status_code, 200)

    def login_tech(self) -> None:
        self.assertEqual(login(self.client, "tech@x.com", "secret1").status_code, 200)


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        response = self.client.get(f"{API}/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "connected")
        self.assertEqual(response.json()["status"], "ok")

    def test_degraded_when_store_unreachable(self) -> None:
        with patch("vehiclevault.api.v1.health.check_db_connected", return_value=False):
            response = self.client.get(f"{API}/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["database"], "disconnected")


class TestLogin(ApiTestCase):
    def test_success_sets_session_cookie(self) -> None:
        response = login(self.client, "tech@x.com", "secret1")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["user"]["profile"], "technician")
        self.assertNotIn("password_digest", body["user"])
        self.assertIn(get_settings().SESSION_KEY, response.cookies)

        me = self.client.get(f"{API}/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["id"], self.tech.id)

    def test_same_message_for_unknown_email_and_wrong_password(self) -> None:
        unknown = login(self.client, "nobody@x.com", "secret1")
        wrong = login(self.client, "tech@x.com", "wrong-password")
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.json()["detail"], wrong.json()["detail"])

    def test_inactive_account(self) -> None:
        seed_user(self.factory, email="gone@x.com", password="secret1", status=UserStatus.INACTIVE)
        response = login(self.client, "gone@x.com", "secret1")
        self.assertEqual(response.status_code, 401)
        self.assertIn("inactive", response.json()["detail"])

    def test_store_unavailable(self) -> None:
        with patch(
            "vehiclevault.services.credential_store.UserStore.find_one_by_email",
            side_effect=StoreUnavailableError(),
        ):
            response = login(self.client, "tech@x.com", "secret1")
        self.assertEqual(response.status_code, 503)
        self.assertIn("try again", response.json()["detail"])

    def test_logout(self) -> None:
        self.login_tech()
        self.assertEqual(self.client.post(f"{API}/auth/logout").status_code, 200)
        self.assertEqual(self.client.get(f"{API}/auth/me").status_code, 401)


class TestRouteGuard(ApiTestCase):
    def test_unauthenticated_gets_login_notice(self) -> None:
        for path in ("/auth/me", "/users", "/brands", "/models", "/vehicles"):
            response = self.client.get(f"{API}{path}")
            self.assertEqual(response.status_code, 401, path)
            self.assertEqual(response.json()["code"], "not_authenticated")

    def test_malformed_cookie_forces_logout(self) -> None:
        self.client.cookies.set(get_settings().SESSION_KEY, "not-a-session")
        response = self.client.get(f"{API}/auth/me")
        self.assertEqual(response.status_code, 401)
        self.assertIn("set-cookie", response.headers)


class TestUserManagement(ApiTestCase):
    def test_technician_gets_access_denied_not_login(self) -> None:
        self.login_tech()
        response = self.client.get(f"{API}/users")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "access_denied")
        self.assertEqual(self.client.get(f"{API}/auth/me").status_code, 200)

    def test_admin_lists_users_without_digests(self) -> None:
        self.login_admin()
        response = self.client.get(f"{API}/users")
        self.assertEqual(response.status_code, 200)
        users = response.json()["users"]
        self.assertEqual([u["full_name"] for u in users], ["Ada Admin", "Tom Tech"])
        for user in users:
            self.assertNotIn("password_digest", user)

    def test_user_list_survives_unknown_profile_record(self) -> None:
        db = self.factory()
        try:
            UserStore(db).update(self.tech.id, {"profile": "superuser"})
        finally:
            db.close()
        self.login_admin()
        response = self.client.get(f"{API}/users")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([u["id"] for u in response.json()["users"]], [self.admin.id])

    def test_admin_creates_and_updates_user(self) -> None:
        self.login_admin()
        created = self.client.post(
            f"{API}/users",
            json={"full_name": "New Tech", "email": "new@x.com", "password": "secret1"},
        )
        self.assertEqual(created.status_code, 201)
        user_id = created.json()["id"]

        duplicate = self.client.post(
            f"{API}/users",
            json={"full_name": "Again", "email": "NEW@x.com", "password": "secret1"},
        )
        self.assertEqual(duplicate.status_code, 409)

        short = self.client.post(
            f"{API}/users",
            json={"full_name": "Short", "email": "short@x.com", "password": "123"},
        )
        self.assertEqual(short.status_code, 422)
        self.assertEqual(short.json()["field"], "password")

        updated = self.client.patch(f"{API}/users/{user_id}", json={"status": "inactive"})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["status"], "inactive")
        self.assertEqual(login(self.client, "new@x.com", "secret1").status_code, 401)

    def test_admin_cannot_delete_self(self) -> None:
        self.login_admin()
        response = self.client.delete(f"{API}/users/{self.admin.id}")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "action_refused")

    def test_admin_deletes_technician(self) -> None:
        self.login_admin()
        self.assertEqual(self.client.delete(f"{API}/users/{self.tech.id}").status_code, 204)
        self.assertEqual(self.client.delete(f"{API}/users/{self.tech.id}").status_code, 404)


class TestCatalog(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.login_tech()

    def _brand(self, name: str = "Toyota") -> str:
        response = self.client.post(f"{API}/brands", json={"name": name})
        self.assertEqual(response.status_code, 201)
        return response.json()["id"]

    def _model(self, brand_id: str, name: str = "Corolla") -> str:
        response = self.client.post(f"{API}/models", json={"name": name, "brand_id": brand_id})
        self.assertEqual(response.status_code, 201)
        return response.json()["id"]

    def _vehicle(self, model_id: str) -> dict:
        response = self.client.post(
            f"{API}/vehicles",
            json={"model_id": model_id, "year": 2020, "colors": "red", "observation": "dent"},
        )
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_brand_validation_and_listing(self) -> None:
        self.assertEqual(self.client.post(f"{API}/brands", json={"name": "  "}).status_code, 422)
        self._brand("Toyota")
        self._brand("Audi")
        names = [b["name"] for b in self.client.get(f"{API}/brands").json()["brands"]]
        self.assertEqual(names, ["Audi", "Toyota"])

    def test_model_requires_existing_brand(self) -> None:
        response = self.client.post(f"{API}/models", json={"name": "Ghost", "brand_id": "missing"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["code"], "reference_not_found")

    def test_models_list_brand_names(self) -> None:
        self._model(self._brand("Toyota"), "Corolla")
        models = self.client.get(f"{API}/models").json()["models"]
        self.assertEqual(models[0]["brand_name"], "Toyota")

    def test_brand_in_use_cannot_be_deleted(self) -> None:
        brand_id = self._brand()
        model_id = self._model(brand_id)
        self.assertEqual(self.client.delete(f"{API}/brands/{brand_id}").status_code, 409)
        self.assertEqual(self.client.delete(f"{API}/models/{model_id}").status_code, 204)
        self.assertEqual(self.client.delete(f"{API}/brands/{brand_id}").status_code, 204)

    def test_model_in_use_cannot_be_deleted(self) -> None:
        model_id = self._model(self._brand())
        vehicle = self._vehicle(model_id)
        self.assertEqual(self.client.delete(f"{API}/models/{model_id}").status_code, 409)
        self.assertEqual(self.client.delete(f"{API}/vehicles/{vehicle['id']}").status_code, 204)
        self.assertEqual(self.client.delete(f"{API}/models/{model_id}").status_code, 204)

    def test_vehicle_names_follow_model(self) -> None:
        toyota_model = self._model(self._brand("Toyota"), "Corolla")
        audi_model = self._model(self._brand("Audi"), "A4")
        vehicle = self._vehicle(toyota_model)
        self.assertEqual((vehicle["brand"], vehicle["model"]), ("Toyota", "Corolla"))

        response = self.client.patch(
            f"{API}/vehicles/{vehicle['id']}",
            json={"model_id": audi_model, "observation": None},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual((body["brand"], body["model"]), ("Audi", "A4"))
        self.assertIsNone(body["observation"])
        self.assertEqual(body["colors"], "red")

    def test_vehicle_validation(self) -> None:
        model_id = self._model(self._brand())
        bad_year = self.client.post(
            f"{API}/vehicles", json={"model_id": model_id, "year": 1800, "colors": "red"}
        )
        self.assertEqual(bad_year.status_code, 422)
        unknown_model = self.client.post(
            f"{API}/vehicles", json={"model_id": "missing", "year": 2020, "colors": "red"}
        )
        self.assertEqual(unknown_model.status_code, 422)
        self.assertEqual(self.client.get(f"{API}/vehicles/missing").status_code, 404)


if __name__ == "__main__":
    unittest.main()
