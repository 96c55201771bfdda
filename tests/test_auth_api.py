"""API tests for registration, login, the authentication gate and /me."""

from datetime import UTC, datetime, timedelta

from fleetdesk.core.config import settings
from fleetdesk.core.security import create_access_token
from tests.support import DEFAULT_PASSWORD, ApiTestCase

PREFIX = settings.API_V1_PREFIX


class TestRegister(ApiTestCase):
    def _register(self, email: str, name: str = "Ana"):
        return self.client.post(
            f"{PREFIX}/auth/register",
            json={"name": name, "email": email, "password": "secret123"},
        )

    def test_first_user_is_admin_and_later_users_are_not(self) -> None:
        first = self._register("ana@example.com")
        self.assertEqual(first.status_code, 201, first.text)
        self.assertEqual(first.json()["user"]["role"], "Admin")

        second = self._register("bruno@example.com", name="Bruno")
        self.assertEqual(second.status_code, 201, second.text)
        self.assertEqual(second.json()["user"]["role"], "User")

    def test_registration_keeps_narrowed_default_roles(self) -> None:
        first = self._register("ana@example.com")
        headers = self.auth_headers(first.json()["user"]["id"])
        roles = {r["name"]: r["id"] for r in self.client.get(f"{PREFIX}/roles", headers=headers).json()}

        resp = self.client.put(
            f"{PREFIX}/roles/{roles['Admin']}/permissions",
            json={"permissions": ["users.manage"]},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        resp = self.client.put(
            f"{PREFIX}/roles/{roles['User']}/permissions",
            json={"permissions": []},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        self.assertEqual(self._register("bruno@example.com", name="Bruno").status_code, 201)

        listed = {r["name"]: r["permissions"] for r in self.client.get(f"{PREFIX}/roles", headers=headers).json()}
        self.assertEqual(listed["Admin"], ["users.manage"])
        self.assertEqual(listed["User"], [])

    def test_duplicate_email(self) -> None:
        self._register("ana@example.com")
        resp = self._register("ANA@example.com")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "E-mail já está em uso"})

    def test_short_password_is_invalid_data(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "123"},
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "invalid data")
        self.assertEqual(body["errors"][0]["field"], "password")


class TestLogin(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.make_user("finance@example.com", ["financial.view", "financial.create"])

    def _login(self, password: str, email: str = "finance@example.com"):
        return self.client.post(f"{PREFIX}/auth/login", json={"email": email, "password": password})

    def test_success_returns_token_and_permissions(self) -> None:
        resp = self._login(DEFAULT_PASSWORD)
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["id"], self.user_id)
        self.assertEqual(body["user"]["permissions"], ["financial.create", "financial.view"])

    def test_wrong_password_and_unknown_email_look_the_same(self) -> None:
        for resp in (self._login("wrong-pass"), self._login(DEFAULT_PASSWORD, email="nobody@example.com")):
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.json(), {"message": "Email ou senha inválidos"})

    def test_no_lockout_after_failures(self) -> None:
        for _ in range(3):
            self.assertEqual(self._login("wrong-pass").status_code, 401)
        self.assertEqual(self._login(DEFAULT_PASSWORD).status_code, 200)

    def test_inactive_user_is_refused(self) -> None:
        self.make_user("off@example.com", status="inactive")
        resp = self._login(DEFAULT_PASSWORD, email="off@example.com")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "user inactive")


class TestAuthGate(ApiTestCase):
    def _me(self, authorization: str | None):
        headers = {} if authorization is None else {"Authorization": authorization}
        return self.client.get(f"{PREFIX}/me", headers=headers)

    def _assert_401(self, resp, message: str) -> None:
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": message})
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_missing_header(self) -> None:
        self._assert_401(self._me(None), "token not provided")

    def test_bad_format(self) -> None:
        token = create_access_token(1)
        for value in (f"Token {token}", token, f"Bearer {token} extra"):
            with self.subTest(value=value[:12]):
                self._assert_401(self._me(value), "invalid token format")

    def test_expired(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=2)
        self._assert_401(self._me(f"Bearer {create_access_token(1, now=issued)}"), "token expired")

    def test_invalid_signature(self) -> None:
        self._assert_401(self._me("Bearer not.a.token"), "invalid token")


class TestMe(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.make_user("me@example.com", ["dashboard.view"], name="Carla")
        self.headers = self.auth_headers(self.user_id)

    def test_read_profile(self) -> None:
        resp = self.client.get(f"{PREFIX}/me", headers=self.headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["name"], "Carla")
        self.assertEqual(body["permissions"], ["dashboard.view"])

    def test_update_profile_refuses_email_of_another_user(self) -> None:
        self.make_user("other@example.com")
        resp = self.client.put(
            f"{PREFIX}/me",
            headers=self.headers,
            json={"name": "Carla", "email": "other@example.com"},
        )
        self.assertEqual(resp.status_code, 400)

    def test_update_profile(self) -> None:
        resp = self.client.put(
            f"{PREFIX}/me",
            headers=self.headers,
            json={"name": "Carla Dias", "email": "carla@example.com", "phone": "", "address": "Rua A"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["email"], "carla@example.com")
        self.assertIsNone(resp.json()["phone"])

    def test_change_password(self) -> None:
        wrong = self.client.patch(
            f"{PREFIX}/me/password",
            headers=self.headers,
            json={"current_password": "nope", "new_password": "another123"},
        )
        self.assertEqual(wrong.status_code, 401)

        same = self.client.patch(
            f"{PREFIX}/me/password",
            headers=self.headers,
            json={"current_password": DEFAULT_PASSWORD, "new_password": DEFAULT_PASSWORD},
        )
        self.assertEqual(same.status_code, 400)

        ok = self.client.patch(
            f"{PREFIX}/me/password",
            headers=self.headers,
            json={"current_password": DEFAULT_PASSWORD, "new_password": "another123"},
        )
        self.assertEqual(ok.status_code, 200, ok.text)
        login = self.client.post(
            f"{PREFIX}/auth/login", json={"email": "me@example.com", "password": "another123"}
        )
        self.assertEqual(login.status_code, 200)
