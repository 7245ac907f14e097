import pytest
from fastapi.testclient import TestClient

from crosstab.main import create_app
from crosstab.services.channel_service import ChannelRegistry, get_registry
from crosstab.transport import LocalTransport


@pytest.fixture
def registry():
    registry = ChannelRegistry(transport=LocalTransport())
    yield registry
    registry.close_all()


@pytest.fixture
def client(registry):
    app = create_app()
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as client:
        yield client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_get_channel(client):
    response = client.post("/api/channels", json={"channel_id": "X"})

    assert response.status_code == 201
    assert response.json() == {"channel_id": "X", "global_channel_id": "ctcm", "closed": False}
    assert client.get("/api/channels/X").json()["channel_id"] == "X"
    assert [c["channel_id"] for c in client.get("/api/channels").json()] == ["X"]


def test_create_generates_channel_id(client):
    response = client.post("/api/channels", json={})

    assert response.status_code == 201
    assert len(response.json()["channel_id"]) == 6


def test_create_duplicate_channel_conflicts(client):
    client.post("/api/channels", json={"channel_id": "dup"})

    response = client.post("/api/channels", json={"channel_id": "dup"})

    assert response.status_code == 409


def test_unknown_channel_is_404(client):
    assert client.get("/api/channels/nope").status_code == 404
    assert client.post("/api/channels/nope/messages", json={"message": 1}).status_code == 404
    assert client.get("/api/channels/nope/inbox").status_code == 404
    assert client.delete("/api/channels/nope").status_code == 404


def test_broadcast_reaches_other_channel_inbox(client):
    client.post("/api/channels", json={"channel_id": "X"})
    client.post("/api/channels", json={"channel_id": "Y"})

    response = client.post("/api/channels/X/broadcast", json={"message": {"v": 1}})
    assert response.status_code == 200

    inbox = client.get("/api/channels/Y/inbox").json()
    assert inbox == {"channel_id": "Y", "messages": [{"v": 1}]}
    assert client.get("/api/channels/Y/inbox").json()["messages"] == []

    history_x = client.get("/api/channels/X/history", params={"include_global": True}).json()
    history_y = client.get("/api/channels/Y/history", params={"include_global": True}).json()
    assert history_x["history"] == [[], [{"v": 1}]]
    assert history_y["history"] == [[], []]


def test_send_message_and_history(client, registry):
    client.post("/api/channels", json={"channel_id": "A"})
    client.post("/api/channels", json={"channel_id": "B"})

    client.post("/api/channels/A/messages", json={"message": "kept"})
    client.post("/api/channels/A/messages", json={"message": "skipped", "store_in_history": False})

    assert client.get("/api/channels/A/history").json()["history"] == [["kept"]]
    assert client.get("/api/channels/B/inbox").json()["messages"] == []


def test_send_message_on_closed_manager_reports_category(client, registry):
    client.post("/api/channels", json={"channel_id": "Z"})
    registry.managers["Z"].close()

    response = client.post("/api/channels/Z/messages", json={"message": "late"})

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "send"


def test_close_channel(client, registry):
    client.post("/api/channels", json={"channel_id": "bye"})

    response = client.delete("/api/channels/bye")

    assert response.status_code == 200
    assert "bye" not in registry.managers
    assert client.get("/api/channels/bye").status_code == 404


def test_invalid_payload_is_422(client):
    response = client.post("/api/channels", json={"channel_id": 5})

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_create_global_channel_id_is_rejected(client, registry):
    response = client.post("/api/channels", json={"channel_id": "ctcm"})

    assert response.status_code == 400
    assert response.json()["error"] == "initialization"
    assert registry.managers == {}
