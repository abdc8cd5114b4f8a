from __future__ import annotations

from fastapi.testclient import TestClient
from httpx import Response


ADMIN_PASSWORD = "test-secret"
WORDS = ("dom", "chmura", "silnik")
CREATED_AT = 1_700_000_000_000


class ScriptedRandom:
    """RandomSource that replays fixed values (modulo the requested bound)."""

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return self._values.pop(0) % stop


def create_lobby(
    client: TestClient,
    *,
    admin_name: str = "Ala",
    max_players: object = 5,
    difficulty: object = "sredni",
) -> dict:
    resp = client.post(
        "/api/lobby/create",
        json={
            "adminPassword": ADMIN_PASSWORD,
            "adminName": admin_name,
            "maxPlayers": max_players,
            "difficulty": difficulty,
        },
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def join_lobby(client: TestClient, code: str, name: str) -> Response:
    return client.post("/api/lobby/join", json={"code": code, "name": name})


def start_game(client: TestClient, code: str, password: str = ADMIN_PASSWORD) -> Response:
    return client.post("/api/lobby/start", json={"code": code, "adminPassword": password})
