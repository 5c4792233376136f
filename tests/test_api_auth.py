"""HTTP tests for /api/auth: status codes, headers and response shapes."""

import unittest

from db_support import TEST_PASSWORD, ApiTestCase, auth_headers, make_user


class TestLoginEndpoint(ApiTestCase):
    def _login(self, identifier: str, password: str):
        return self.client.post(
            "/api/auth/login",
            json={"emailOrUsername": identifier, "password": password},
        )

    def test_success_returns_token_and_user(self) -> None:
        make_user(self.db)
        response = self._login("Jane@Mail.com", TEST_PASSWORD)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Login successful")
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["username"], "jane")
        self.assertNotIn("password_hash", body["user"])
        self.assertNotIn("failed_login_attempts", body["user"])

    def test_token_from_login_opens_profile(self) -> None:
        make_user(self.db)
        token = self._login("jane", TEST_PASSWORD).json()["token"]
        response = self.client.get(
            "/api/auth/profile", headers={"Authorization": f"Bearer {token}"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["email"], "jane@mail.com")

    def test_wrong_password_is_401_with_attempts_remaining(self) -> None:
        make_user(self.db)
        response = self._login("jane", "wrong-password")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["attempts_remaining"], 4)

    def test_unknown_user_is_401_without_attempts(self) -> None:
        response = self._login("nobody", "whatever")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Invalid credentials"})

    def test_fifth_failure_is_423_with_retry_after(self) -> None:
        make_user(self.db)
        for _ in range(4):
            self.assertEqual(self._login("jane", "wrong-password").status_code, 401)
        response = self._login("jane", "wrong-password")
        self.assertEqual(response.status_code, 423)
        self.assertEqual(response.headers["Retry-After"], "900")
        self.assertEqual(response.json()["retry_after_minutes"], 15)

        # Correct password while locked is still refused.
        self.assertEqual(self._login("jane", TEST_PASSWORD).status_code, 423)

    def test_suspended_and_pending_are_403(self) -> None:
        make_user(self.db, status="suspended")
        make_user(self.db, email="pat@mail.com", username="pat", status="pending")
        suspended = self._login("jane", TEST_PASSWORD)
        pending = self._login("pat", "wrong-password")
        self.assertEqual(suspended.status_code, 403)
        self.assertEqual(suspended.json()["message"], "Account has been suspended")
        self.assertEqual(pending.status_code, 403)
        self.assertEqual(pending.json()["message"], "Account is pending approval")

    def test_missing_field_is_400(self) -> None:
        response = self.client.post("/api/auth/login", json={"emailOrUsername": "jane"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.json()["message"])


class TestSignupEndpoint(ApiTestCase):
    def _signup(self, **overrides):
        body = {
            "email": "ada@mail.com",
            "username": "ada",
            "password": "hunter22",
            "confirmPassword": "hunter22",
        }
        body.update(overrides)
        return self.client.post("/api/auth/signup", json=body)

    def test_first_signup_is_admin(self) -> None:
        response = self._signup()
        self.assertEqual(response.status_code, 201)
        user = response.json()["user"]
        self.assertEqual((user["role"], user["status"]), ("admin", "active"))

    def test_later_signup_is_pending_and_cannot_log_in(self) -> None:
        make_user(self.db, email="root@mail.com", username="root", role="admin")
        response = self._signup()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["user"]["status"], "pending")
        login = self.client.post(
            "/api/auth/login", json={"emailOrUsername": "ada", "password": "hunter22"}
        )
        self.assertEqual(login.status_code, 403)

    def test_duplicate_is_409(self) -> None:
        make_user(self.db, email="ada@mail.com", username="someone")
        response = self._signup(email="ADA@mail.com")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["message"], "Email or username already exists")

    def test_short_password_is_400(self) -> None:
        response = self._signup(password="123", confirmPassword="123")
        self.assertEqual(response.status_code, 400)

    def test_invalid_email_is_400(self) -> None:
        response = self._signup(email="not-an-email")
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.json()["message"])


class TestProfileEndpoints(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = make_user(self.db)
        self.headers = auth_headers(self.user)

    def test_profile_requires_token(self) -> None:
        response = self.client.get("/api/auth/profile")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers["WWW-Authenticate"], "Bearer")

    def test_garbage_token_is_401(self) -> None:
        response = self.client.get(
            "/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"}
        )
        self.assertEqual(response.status_code, 401)

    def test_update_profile(self) -> None:
        response = self.client.put(
            "/api/auth/profile", headers=self.headers, json={"language": "es"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["language"], "es")

    def test_unsupported_language_is_400(self) -> None:
        response = self.client.put(
            "/api/auth/profile", headers=self.headers, json={"language": "fr"}
        )
        self.assertEqual(response.status_code, 400)

    def test_change_password(self) -> None:
        response = self.client.put(
            "/api/auth/password",
            headers=self.headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "brand-new"},
        )
        self.assertEqual(response.status_code, 200)
        login = self.client.post(
            "/api/auth/login", json={"emailOrUsername": "jane", "password": "brand-new"}
        )
        self.assertEqual(login.status_code, 200)

    def test_wrong_current_password_is_400_not_401(self) -> None:
        response = self.client.put(
            "/api/auth/password",
            headers=self.headers,
            json={"currentPassword": "nope-nope", "newPassword": "brand-new"},
        )
        self.assertEqual(response.status_code, 400)

    def test_suspension_revokes_existing_token(self) -> None:
        self.user.status = "suspended"
        self.db.commit()
        response = self.client.get("/api/auth/profile", headers=self.headers)
        self.assertEqual(response.status_code, 403)


class TestAdminEndpoints(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = make_user(self.db, email="root@mail.com", username="root", role="admin")
        self.admin_headers = auth_headers(self.admin)

    def test_non_admin_is_403(self) -> None:
        user = make_user(self.db)
        response = self.client.get("/api/auth/pending-users", headers=auth_headers(user))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Admin access required")

    def test_pending_users_uses_camel_case_key(self) -> None:
        pending = make_user(self.db, status="pending")
        response = self.client.get("/api/auth/pending-users", headers=self.admin_headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([u["id"] for u in response.json()["pendingUsers"]], [pending.id])

    def test_approve_then_approve_again(self) -> None:
        pending = make_user(self.db, status="pending")
        url = f"/api/auth/approve-user/{pending.id}"
        first = self.client.post(url, headers=self.admin_headers)
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["user"]["status"], "active")
        self.assertEqual(self.client.post(url, headers=self.admin_headers).status_code, 404)

    def test_reject_active_user_is_404(self) -> None:
        active = make_user(self.db)
        response = self.client.delete(
            f"/api/auth/reject-user/{active.id}", headers=self.admin_headers
        )
        self.assertEqual(response.status_code, 404)
        self.assertIsNotNone(self.reload(active))

    def test_suspend_pending_is_409(self) -> None:
        pending = make_user(self.db, status="pending")
        response = self.client.post(
            f"/api/auth/suspend-user/{pending.id}", headers=self.admin_headers
        )
        self.assertEqual(response.status_code, 409)

    def test_suspend_and_activate(self) -> None:
        user = make_user(self.db)
        suspended = self.client.post(
            f"/api/auth/suspend-user/{user.id}", headers=self.admin_headers
        )
        self.assertEqual(suspended.json()["user"]["status"], "suspended")
        activated = self.client.post(
            f"/api/auth/activate-user/{user.id}", headers=self.admin_headers
        )
        self.assertEqual(activated.json()["user"]["status"], "active")

    def test_self_delete_is_403(self) -> None:
        response = self.client.delete(
            f"/api/auth/users/{self.admin.id}", headers=self.admin_headers
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_edits_and_deletes_user(self) -> None:
        user = make_user(self.db)
        edited = self.client.put(
            f"/api/auth/users/{user.id}",
            headers=self.admin_headers,
            json={"username": "jane_doe"},
        )
        self.assertEqual(edited.status_code, 200)
        self.assertEqual(edited.json()["user"]["username"], "jane_doe")
        deleted = self.client.delete(f"/api/auth/users/{user.id}", headers=self.admin_headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(
            self.client.get("/api/auth/users", headers=self.admin_headers).json()["users"][0]["id"],
            self.admin.id,
        )


class TestHealth(ApiTestCase):
    def test_health_reports_policy(self) -> None:
        response = self.client.get("/api/health/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["signup_policy"], "first_user_admin")


if __name__ == "__main__":
    unittest.main()
