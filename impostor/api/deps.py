from __future__ import annotations

from starlette.requests import HTTPConnection

from impostor.auth import Authorizer
from impostor.lobby_service import LobbyService
from impostor.websocket_hub import LobbyUpdatesHub


def get_lobby_service(conn: HTTPConnection) -> LobbyService:
    return conn.app.state.lobby_service


def get_authorizer(conn: HTTPConnection) -> Authorizer:
    return conn.app.state.authorizer


def get_hub(conn: HTTPConnection) -> LobbyUpdatesHub:
    return conn.app.state.hub
