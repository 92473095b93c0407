from fastapi.testclient import TestClient

from src.server.app import create_app
from src.server.dependencies import clear_caches
from src.task_tracker.config import Config, ServerConfig

from .fakes import TEST_JWT_SECRET

PASSWORD = "Passw0rd!"


def create_test_client(tmp_path, monkeypatch) -> TestClient:
    db_path = tmp_path / "api_tasks.db"
    monkeypatch.setenv("TASK_TRACKER_ENV", "test")
    monkeypatch.setenv("TASK_TRACKER_DB_BACKEND", "sqlite")
    monkeypatch.setenv("TASK_TRACKER_DB_PATH", str(db_path))
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    clear_caches()
    app = create_app()
    return TestClient(app)


def sign_up_and_in(client: TestClient, username: str) -> dict:
    resp = client.post("/auth/signup", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 201
    resp = client.post("/auth/signin", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def test_health(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)

    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_auth_flow(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)
    credentials = {"username": "alice", "password": PASSWORD}

    resp = client.post("/auth/signup", json=credentials)
    assert resp.status_code == 201

    resp = client.post("/auth/signup", json=credentials)
    assert resp.status_code == 409

    resp = client.post("/auth/signup", json={"username": "weak", "password": "password"})
    assert resp.status_code == 422

    resp = client.post("/auth/signup", json={"username": "abc", "password": PASSWORD})
    assert resp.status_code == 422

    resp = client.post("/auth/signin", json={"username": "alice", "password": "Wrong0ne!"})
    assert resp.status_code == 401

    resp = client.post("/auth/signin", json={"username": "nobody", "password": PASSWORD})
    assert resp.status_code == 401

    resp = client.post("/auth/signin", json=credentials)
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]


def test_tasks_require_token(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)

    assert client.get("/tasks").status_code == 401
    assert client.post("/tasks", json={"title": "t", "description": "d"}).status_code == 401

    resp = client.get("/tasks", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_task_api_crud_flow(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)
    headers = sign_up_and_in(client, "alice")

    resp = client.get("/tasks", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == []

    resp = client.post(
        "/tasks",
        json={"title": "Prepare slides", "description": "For Friday meeting"},
        headers=headers,
    )
    assert resp.status_code == 201
    task = resp.json()
    assert task["title"] == "Prepare slides"
    assert task["status"] == "OPEN"
    task_id = task["id"]

    client.post(
        "/tasks",
        json={"title": "Groceries", "description": "milk"},
        headers=headers,
    )

    resp = client.get("/tasks", params={"search": "FRIDAY"}, headers=headers)
    assert [t["id"] for t in resp.json()] == [task_id]

    resp = client.patch(f"/tasks/{task_id}/status", json={"status": "IN_PROGRESS"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "IN_PROGRESS"

    resp = client.get("/tasks", params={"status": "IN_PROGRESS"}, headers=headers)
    assert [t["id"] for t in resp.json()] == [task_id]

    resp = client.get(f"/tasks/{task_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "IN_PROGRESS"

    resp = client.patch(f"/tasks/{task_id}/status", json={"status": "FINISHED"}, headers=headers)
    assert resp.status_code == 422

    resp = client.get("/tasks", params={"status": "nope"}, headers=headers)
    assert resp.status_code == 422

    resp = client.post("/tasks", json={"title": "", "description": "x"}, headers=headers)
    assert resp.status_code == 422

    resp = client.delete(f"/tasks/{task_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"deleted": True}

    resp = client.delete(f"/tasks/{task_id}", headers=headers)
    assert resp.status_code == 404

    resp = client.get(f"/tasks/{task_id}", headers=headers)
    assert resp.status_code == 404


def test_tasks_are_private_to_their_owner(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)
    alice = sign_up_and_in(client, "alice")
    bob = sign_up_and_in(client, "bobby")

    resp = client.post("/tasks", json={"title": "secret", "description": "alice only"}, headers=alice)
    task_id = resp.json()["id"]

    assert client.get("/tasks", headers=bob).json() == []
    assert client.get(f"/tasks/{task_id}", headers=bob).status_code == 404
    assert (
        client.patch(f"/tasks/{task_id}/status", json={"status": "DONE"}, headers=bob).status_code
        == 404
    )
    assert client.delete(f"/tasks/{task_id}", headers=bob).status_code == 404

    assert client.get(f"/tasks/{task_id}", headers=alice).json()["status"] == "OPEN"


def test_oversized_task_id_is_not_found(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)
    headers = sign_up_and_in(client, "alice")
    huge = 99999999999999999999

    assert client.get(f"/tasks/{huge}", headers=headers).status_code == 404
    assert client.delete(f"/tasks/{huge}", headers=headers).status_code == 404
    resp = client.patch(f"/tasks/{huge}/status", json={"status": "DONE"}, headers=headers)
    assert resp.status_code == 404


def test_cors_is_permissive_in_development():
    client = TestClient(create_app(Config(environment="development")))

    resp = client.get("/health", headers={"Origin": "https://anywhere.example"})

    assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_is_restricted_outside_development():
    config = Config(
        environment="production",
        server=ServerConfig(origin="https://tasks.example.com"),
    )
    client = TestClient(create_app(config))

    allowed = client.get("/health", headers={"Origin": "https://tasks.example.com"})
    assert allowed.headers["access-control-allow-origin"] == "https://tasks.example.com"
    assert "access-control-allow-credentials" not in allowed.headers

    denied = client.get("/health", headers={"Origin": "https://evil.example"})
    assert "access-control-allow-origin" not in denied.headers
