import pytest

from app import repositories
from app.sheet_client import SheetTransportError


@pytest.fixture(autouse=True)
def no_ip_lookup(monkeypatch):
    monkeypatch.setattr(repositories, "get_client_ip", lambda session=None: "203.0.113.5")


def test_login_success(client, sheet):
    sheet.responses["login"] = {"success": True, "user": {"username": "admin", "fullName": "Admin", "role": "admin"}}
    r = client.post("/login", json={"username": " admin ", "password": "secret "})
    assert r.status_code == 200
    out = r.json()
    assert out["success"] is True
    assert out["user"]["role"] == "admin"
    assert sheet.posted("login") == [{"username": "admin", "password": "secret", "ip": "203.0.113.5"}]


def test_login_wrong_password(client, sheet):
    sheet.responses["login"] = {"success": False, "error": "Wrong password"}
    out = client.post("/login", json={"username": "admin", "password": "x"}).json()
    assert out == {"success": False, "user": None, "error": "Wrong password"}


def test_login_outdated_deployment(client, sheet):
    sheet.responses["login"] = {}
    out = client.post("/login", json={"username": "admin", "password": "x"}).json()
    assert out["success"] is False
    assert out["error"] == repositories.DEPLOY_ERROR


def test_login_transport_error_is_reported(client, sheet):
    sheet.responses["login"] = SheetTransportError("connection refused")
    out = client.post("/login", json={"username": "admin", "password": "x"}).json()
    assert out["success"] is False
    assert "connection refused" in out["error"]


def test_login_requires_both_fields(client, sheet):
    assert client.post("/login", json={"username": "admin", "password": " "}).status_code == 400
    assert sheet.calls == []


def test_create_user(client, sheet):
    r = client.post("/users", json={"username": "u1", "password": "p", "fullName": "Nguyễn Văn A", "role": "designer"})
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert sheet.posted("createUser")[0]["role"] == "designer"


def test_create_user_validation(client, sheet):
    assert client.post("/users", json={"username": "u1", "password": "p", "fullName": ""}).status_code == 400
    assert client.post("/users", json={"username": "u1", "password": "p", "fullName": "A", "role": "root"}).status_code == 400
    assert sheet.calls == []


def test_get_client_ip_falls_back(monkeypatch):
    monkeypatch.undo()  # use the real helper, with a failing session

    class Down:
        def get(self, *a, **kw):
            raise repositories.requests.ConnectionError("offline")

    assert repositories.get_client_ip(Down()) == "Unknown"
