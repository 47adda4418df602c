"""
Tests for admin sign-in: the JSON auth API, the HTML login form and the
route guard on admin pages.
"""

from __future__ import annotations

from chosen_arrows.components.auth import ACCESS_DENIED, INVALID_CREDENTIALS


class TestAuthApi:
    def test_login_sets_session_cookie(self, client, admin_id, privileged, rules) -> None:
        response = client.post(
            "/api/auth/login",
            data={"username": "grace@chosenarrows.org", "password": "s3cret"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["access_token"] == f"token-{admin_id}"
        assert body["token_type"] == "bearer"
        assert body["redirect_to"] == "/admin/dashboard"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{rules.auth.cookie_name}=")
        assert f"Bearer token-{admin_id}" in cookie
        assert "HttpOnly" in cookie
        assert privileged.fetch_admin_user(admin_id)["last_login"] is not None

    def test_wrong_password(self, client, admin_id) -> None:
        response = client.post(
            "/api/auth/login",
            data={"username": "grace@chosenarrows.org", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == INVALID_CREDENTIALS

    def test_non_admin_identity_refused(self, client, identity) -> None:
        identity.add("reader@example.org", "pw")

        response = client.post(
            "/api/auth/login", data={"username": "reader@example.org", "password": "pw"}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == ACCESS_DENIED
        assert "set-cookie" not in response.headers

    def test_me_with_bearer_header(self, client, admin_id) -> None:
        token = client.post(
            "/api/auth/login",
            data={"username": "grace@chosenarrows.org", "password": "s3cret"},
        ).json()["access_token"]
        client.cookies.clear()

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"id": admin_id, "role": "admin", "full_name": "Grace Admin"}

    def test_me_without_session(self, client) -> None:
        response = client.get("/api/auth/me")

        assert response.status_code == 401

    def test_logout_clears_cookie(self, client, rules) -> None:
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"status": "success"}
        assert rules.auth.cookie_name in response.headers["set-cookie"]


class TestAdminApiGuard:
    def test_admin_routes_require_session(self, client) -> None:
        for path in (
            "/api/admin/campaigns",
            "/api/admin/testimonials",
            "/api/admin/content",
            "/api/admin/settings",
            "/api/admin/audit",
        ):
            assert client.get(path).status_code == 401, path

    def test_non_admin_session_refused(self, client, identity) -> None:
        user = identity.add("reader@example.org", "pw")
        token = identity.issue_token(user)

        response = client.get(
            "/api/admin/campaigns", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Not an admin user"


class TestAdminPages:
    def test_login_form(self, client) -> None:
        response = client.get("/admin/login")

        assert response.status_code == 200
        assert '<form method="post" action="/admin/login">' in response.text
        assert 'content="noindex"' in response.text

    def test_login_submit_redirects_to_dashboard(self, client, admin_id, rules) -> None:
        response = client.post(
            "/admin/login",
            data={"email": "grace@chosenarrows.org", "password": "s3cret"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/dashboard"
        assert f"{rules.auth.cookie_name}=" in response.headers["set-cookie"]

    def test_login_failure_rerenders_form(self, client, admin_id) -> None:
        response = client.post(
            "/admin/login",
            data={"email": "grace@chosenarrows.org", "password": "wrong"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert INVALID_CREDENTIALS in response.text
        assert 'value="grace@chosenarrows.org"' in response.text

    def test_dashboard_redirects_anonymous_to_login(self, client) -> None:
        response = client.get("/admin/dashboard", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/login"

    def test_dashboard_for_admin_session(self, client, admin_id, identity) -> None:
        token = identity.issue_token(identity.sign_in("grace@chosenarrows.org", "s3cret"))

        response = client.get(
            "/admin/dashboard",
            headers={"Authorization": f"Bearer {token}"},
            follow_redirects=False,
        )

        assert response.status_code == 200
        assert "Signed in as Grace Admin (admin)" in response.text
        assert "Active campaigns: 0" in response.text

    def test_logout_redirects_to_login(self, client) -> None:
        response = client.get("/admin/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/login"
