import uuid
from conftest import PASSWORD, sign_up
from tasklist import config
from tasklist.utils.auth import create_token


def _email():
    return f"test_{uuid.uuid4().hex}@example.com"


def test_register_and_login_success(client):
    email = _email()
    password = "correct_horse_battery_staple"

    # register
    r = client.post("/auth/register", json={"email": email, "password": password})
    assert r.status_code == 201
    data = r.json()
    assert data["email"] == email
    assert "id" in data

    # login
    r2 = client.post("/auth/login", json={"email": email, "password": password})
    assert r2.status_code == 200
    assert "token" in r2.json()
    assert client.cookies.get(config.SESSION_COOKIE_NAME) == r2.json()["token"]


def test_register_duplicate_email(client):
    email = _email()
    assert client.post("/auth/register", json={"email": email, "password": PASSWORD}).status_code == 201
    r = client.post("/auth/register", json={"email": email, "password": "Other123!"})
    assert r.status_code == 400
    assert "exists" in r.json()["error"].lower()


def test_register_password_too_long(client):
    r = client.post("/auth/register", json={"email": _email(), "password": "a" * 100})
    assert r.status_code == 400
    text = r.text.lower()
    assert "password" in text and ("too long" in text or "72" in text)


def test_register_invalid_email(client):
    r = client.post("/auth/register", json={"email": "not_an_email", "password": PASSWORD})
    assert r.status_code == 400


def test_login_wrong_password(client):
    email = _email()
    client.post("/auth/register", json={"email": email, "password": PASSWORD})
    r = client.post("/auth/login", json={"email": email, "password": "WrongPass123!"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_session_cookie_resolves_principal(client):
    email = _email()
    client.post("/auth/register", json={"email": email, "password": PASSWORD})
    client.post("/auth/login", json={"email": email, "password": PASSWORD})

    r = client.get("/auth/session")
    assert r.status_code == 200
    assert r.json()["email"] == email

    # the cookie alone authenticates task calls
    r = client.post("/api/tasks", json={"title": "from cookie"})
    assert r.status_code == 201

    r = client.post("/auth/logout")
    assert r.status_code == 200
    assert client.get("/auth/session").status_code == 401


def test_bearer_header_resolves_principal(client):
    headers = sign_up(client)
    r = client.get("/auth/session", headers=headers)
    assert r.status_code == 200


class TestAuthenticationGate:
    def test_missing_token(self, client):
        for method, url in [
            ("get", "/api/tasks"),
            ("post", "/api/tasks"),
            ("patch", "/api/tasks/1/toggle"),
            ("patch", "/api/tasks/1"),
            ("delete", "/api/tasks/1"),
        ]:
            r = client.request(method.upper(), url)
            assert r.status_code == 401, url
            assert r.json() == {"error": "Unauthorized"}

    def test_invalid_token(self, client):
        r = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401

    def test_expired_token(self, client, monkeypatch):
        email = _email()
        client.post("/auth/register", json={"email": email, "password": PASSWORD})
        monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
        token = create_token({"sub": email})
        r = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert "expired" in r.json()["error"].lower()

    def test_token_without_backing_user(self, client):
        token = create_token({"sub": "ghost@example.com"})
        r = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_token_without_subject(self, client):
        token = create_token({"name": "nobody"})
        r = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_auth_checked_before_input_validation(self, client):
        assert client.post("/api/tasks", json={"title": ""}).status_code == 401
        assert client.patch("/api/tasks/abc/toggle").status_code == 401
        assert client.delete("/api/tasks/abc").status_code == 401

    def test_auth_checked_before_json_decoding(self, client):
        for raw in [b"{not json", b""]:
            r = client.post("/api/tasks", content=raw, headers={"Content-Type": "application/json"})
            assert r.status_code == 401
            assert r.json() == {"error": "Unauthorized"}
