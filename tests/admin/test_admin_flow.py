"""End-to-end tests for the admin area through the FastAPI app."""

import pytest

from conduit.events import EventWriter
from conduit.users import UserStore

PASSWORD = "supersecret"


def register(client, email: str = "new@example.com", password: str = PASSWORD, confirm: str | None = None):
    return client.post(
        "/admin/register",
        data={"email": email, "password": password, "password_confirm": password if confirm is None else confirm},
    )


def login(client, email: str = "new@example.com", password: str = PASSWORD, return_to: str = ""):
    return client.post("/admin/login", data={"email": email, "password": password, "return": return_to})


@pytest.fixture
def services(client):
    return client.app.state.services


class TestHome:
    def test_home_returns_info(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Conduit"
        assert data["routes"]["home"] == "/"

    def test_api_info(self, client):
        assert client.get("/api/info").json()["name"] == "Conduit"

    def test_unknown_route(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"] == {"message": "Route not found: GET /nope", "code": "NOT_FOUND"}
        assert response.headers["access-control-allow-origin"] == "*"


class TestRegistration:
    def test_register_page(self, client):
        response = client.get("/admin/register")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert 'action="/admin/register"' in response.text

    @pytest.mark.asyncio
    async def test_successful_registration(self, client, services):
        response = register(client)

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/login"
        assert "session=" in response.headers["set-cookie"]

        events = services.get(EventWriter).events
        assert len(events) == 1
        assert events[0].type == "user.registered"
        assert events[0].data.email == "new@example.com"

        user = await services.get(UserStore).find_by_email("new@example.com")
        assert user is not None
        assert user.id == events[0].data.user_id

        assert "Account created successfully" in client.get("/admin/login").text

    def test_duplicate_email_rejected_before_emit(self, client, services):
        register(client)
        response = register(client, email="NEW@example.com")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/register"
        assert len(services.get(EventWriter).events) == 1
        assert "Email already registered" in client.get("/admin/register").text

    def test_password_mismatch(self, client, services):
        response = register(client, confirm="different-password")

        assert response.headers["location"] == "/admin/register"
        assert services.get(EventWriter).events == []
        assert "Passwords do not match" in client.get("/admin/register").text

    def test_short_password(self, client, services):
        response = register(client, password="short")

        assert response.headers["location"] == "/admin/register"
        assert services.get(EventWriter).events == []

    def test_missing_fields(self, client):
        response = client.post("/admin/register", data={"email": "a@example.com"})

        assert response.headers["location"] == "/admin/register"
        assert "All fields are required" in client.get("/admin/register").text

    def test_flash_is_shown_once(self, client):
        register(client, confirm="different-password")

        assert "Passwords do not match" in client.get("/admin/register").text
        assert "Passwords do not match" not in client.get("/admin/register").text


class TestLogin:
    def test_login_page(self, client):
        response = client.get("/admin/login")

        assert response.status_code == 200
        assert "Admin Login" in response.text
        assert 'action="/admin/login"' in response.text
        assert 'method="POST"' in response.text

    def test_login_page_keeps_return_path(self, client):
        response = client.get("/admin/login", params={"return": "/admin/dashboard"})

        assert 'value="/admin/dashboard"' in response.text

    def test_valid_credentials_create_session(self, client):
        register(client)

        response = login(client)

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/dashboard"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("session=")
        assert "HttpOnly" in cookie
        assert "SameSite=Lax" in cookie
        assert "Max-Age=604800" in cookie

    def test_invalid_credentials(self, client):
        register(client)

        response = login(client, password="wrong-password")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/login"
        assert "Invalid email or password" in client.get("/admin/login").text

    def test_unknown_user(self, client):
        response = login(client, email="ghost@example.com")

        assert response.headers["location"] == "/admin/login"

    def test_return_path_is_honoured(self, client):
        register(client)

        response = login(client, return_to="/admin/register")

        assert response.headers["location"] == "/admin/register"

    def test_external_return_path_is_ignored(self, client):
        register(client)

        response = login(client, return_to="//evil.example/phish")

        assert response.headers["location"] == "/admin/dashboard"

    def test_logged_in_user_skips_login_page(self, client):
        register(client)
        login(client)

        response = client.get("/admin/login")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/dashboard"


class TestDashboard:
    def test_requires_session(self, client):
        response = client.get("/admin/dashboard")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/login?return=%2Fadmin%2Fdashboard"

    def test_shows_logged_in_user(self, client):
        register(client)
        login(client)

        response = client.get("/admin/dashboard")

        assert response.status_code == 200
        assert "new@example.com" in response.text
        assert 'action="/admin/logout"' in response.text


class TestLogout:
    def test_logout_clears_session(self, client):
        register(client)
        login(client)

        response = client.post("/admin/logout")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/login"
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert client.get("/admin/dashboard").status_code == 302

    def test_logout_requires_session(self, client):
        response = client.post("/admin/logout")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/login?return=%2Fadmin%2Flogout"
