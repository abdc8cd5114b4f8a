from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status

from impostor.api.deps import get_authorizer, get_hub, get_lobby_service
from impostor.api.models import (
    CreateLobbyRequest,
    CreateLobbyResponse,
    JoinLobbyRequest,
    JoinLobbyResponse,
    LobbyResponse,
    OkResponse,
    RoleResponse,
    StartGameRequest,
)
from impostor.auth import Authorizer
from impostor.errors import NotFoundError
from impostor.lobby_service import LobbyService
from impostor.websocket_hub import LobbyUpdatesHub

router = APIRouter()


def _parse_player_id(raw: str | None) -> int | None:
    """Read a numeric query value the way the browser client writes it.

    "2", " 2 ", "2.0" and "2e0" all mean player 2; anything that is not a
    whole finite number matches no player.
    """

    if raw is None or "_" in raw:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value) or not value.is_integer():
        return None
    return int(value)


@router.get("/api/health", response_model=OkResponse)
async def health() -> OkResponse:
    return OkResponse()


@router.get("/api/lobby/state", response_model=LobbyResponse)
async def lobby_state_route(
    code: str | None = None,
    service: LobbyService = Depends(get_lobby_service),
) -> LobbyResponse:
    return LobbyResponse(lobby=service.query_summary(code=code))


@router.get("/api/lobby/role", response_model=RoleResponse)
async def lobby_role_route(
    code: str | None = None,
    player_id: str | None = Query(default=None, alias="playerId"),
    service: LobbyService = Depends(get_lobby_service),
) -> RoleResponse:
    role = service.query_role(code=code, player_id=_parse_player_id(player_id))
    return RoleResponse(is_impostor=role.is_impostor, word=role.word)


@router.post("/api/lobby/create", response_model=CreateLobbyResponse)
async def create_lobby_route(
    payload: CreateLobbyRequest,
    service: LobbyService = Depends(get_lobby_service),
    authorizer: Authorizer = Depends(get_authorizer),
) -> CreateLobbyResponse:
    created = service.create_lobby(
        admin_name=payload.admin_name,
        max_players=payload.max_players,
        difficulty=payload.difficulty,
        authorized=authorizer.is_authorized(payload.admin_password),
    )
    return CreateLobbyResponse(code=created.lobby.code, player_id=created.player_id, lobby=created.lobby)


@router.post("/api/lobby/join", response_model=JoinLobbyResponse)
async def join_lobby_route(
    payload: JoinLobbyRequest,
    service: LobbyService = Depends(get_lobby_service),
    hub: LobbyUpdatesHub = Depends(get_hub),
) -> JoinLobbyResponse:
    joined = service.join_lobby(code=payload.code, name=payload.name)
    await hub.publish(joined.lobby)
    return JoinLobbyResponse(player_id=joined.player_id, lobby=joined.lobby)


@router.post("/api/lobby/start", response_model=LobbyResponse)
async def start_game_route(
    payload: StartGameRequest,
    service: LobbyService = Depends(get_lobby_service),
    authorizer: Authorizer = Depends(get_authorizer),
    hub: LobbyUpdatesHub = Depends(get_hub),
) -> LobbyResponse:
    summary = service.start_game(
        code=payload.code,
        authorized=authorizer.is_authorized(payload.admin_password),
    )
    await hub.publish(summary)
    return LobbyResponse(lobby=summary)


@router.websocket("/ws/lobby/{code}")
async def lobby_updates_ws(
    websocket: WebSocket,
    code: str,
    service: LobbyService = Depends(get_lobby_service),
    hub: LobbyUpdatesHub = Depends(get_hub),
) -> None:
    try:
        summary = service.query_summary(code=code)
    except NotFoundError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await hub.subscribe(summary, websocket)
    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.unsubscribe(code, websocket)
    except Exception:
        await hub.unsubscribe(code, websocket)
        raise
