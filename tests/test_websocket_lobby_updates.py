from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from impostor.config import Settings
from impostor.main import create_app
from impostor.websocket_hub import LobbyUpdatesHub

from tests.helpers import ADMIN_PASSWORD, create_lobby, join_lobby, start_game


def test_ws_sends_current_lobby_on_subscribe(client: TestClient) -> None:
    code = create_lobby(client)["code"]

    with client.websocket_connect(f"/ws/lobby/{code}") as ws:
        msg = ws.receive_json()
        assert msg["type"] == "lobby_updated"
        assert msg["lobby"]["code"] == code
        assert [p["name"] for p in msg["lobby"]["players"]] == ["Ala"]


def test_ws_lobby_updates_carry_public_summary(client: TestClient) -> None:
    code = create_lobby(client)["code"]

    with client.websocket_connect(f"/ws/lobby/{code}") as ws:
        ws.receive_json()

        assert join_lobby(client, code, "Bob").status_code == 200
        msg = ws.receive_json()
        assert msg["type"] == "lobby_updated"
        assert [p["id"] for p in msg["lobby"]["players"]] == [1, 2]
        assert msg["lobby"]["started"] is False

        join_lobby(client, code, "Cid")
        assert ws.receive_json()["lobby"]["filled"] is False

        assert start_game(client, code).status_code == 200
        started = ws.receive_json()["lobby"]
        assert started["started"] is True
        assert "impostorId" not in started and "secretWord" not in started
        assert started == client.get("/api/lobby/state", params={"code": code}).json()["lobby"]


def test_ws_unknown_lobby_is_refused(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/lobby/00000000") as ws:
            ws.receive_json()


def test_each_app_has_its_own_hub(tmp_path: Path) -> None:
    settings = Settings(admin_password=ADMIN_PASSWORD, static_dir=tmp_path / "no-static")
    app_a = create_app(settings)
    app_b = create_app(settings)

    assert isinstance(app_a.state.hub, LobbyUpdatesHub)
    assert app_a.state.hub is not app_b.state.hub

    with TestClient(app_a) as client_a:
        code = create_lobby(client_a)["code"]
        with client_a.websocket_connect(f"/ws/lobby/{code}") as ws:
            ws.receive_json()
            assert app_a.state.hub.watcher_count(code) == 1
            assert app_b.state.hub.watcher_count(code) == 0

    assert app_a.state.hub.watcher_count(code) == 0
