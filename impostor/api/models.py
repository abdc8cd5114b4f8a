from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Difficulty(StrEnum):
    latwy = "latwy"
    sredni = "sredni"
    trudny = "trudny"


DEFAULT_DIFFICULTY = Difficulty.latwy


class LobbyPhase(StrEnum):
    open = "open"
    started = "started"


# --- server-side state (never sent to clients as-is) ---


class PlayerState(BaseModel):
    id: int
    name: str
    is_admin: bool = False


class LobbyState(BaseModel):
    code: str
    difficulty: Difficulty
    max_players: int
    players: list[PlayerState] = Field(default_factory=list)

    # Both secrets stay None until the game starts, then are set exactly once.
    started: bool = False
    impostor_id: int | None = None
    secret_word: str | None = None

    # Milliseconds since the Unix epoch.
    created_at: int

    @property
    def phase(self) -> LobbyPhase:
        return LobbyPhase.started if self.started else LobbyPhase.open

    @property
    def filled(self) -> bool:
        return len(self.players) >= self.max_players

    def find_player(self, player_id: int) -> PlayerState | None:
        return next((p for p in self.players if p.id == player_id), None)


# --- public views ---


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenWire(_Wire):
    model_config = ConfigDict(frozen=True)


class PlayerSummary(_FrozenWire):
    id: int
    name: str
    is_admin: bool


class LobbySummary(_FrozenWire):
    """Secret-free view of a lobby: no impostor id, no secret word."""

    code: str
    difficulty: Difficulty
    max_players: int
    players: tuple[PlayerSummary, ...]
    started: bool
    filled: bool
    created_at: int

    @classmethod
    def from_state(cls, lobby: LobbyState) -> "LobbySummary":
        return cls(
            code=lobby.code,
            difficulty=lobby.difficulty,
            max_players=lobby.max_players,
            players=tuple(PlayerSummary(id=p.id, name=p.name, is_admin=p.is_admin) for p in lobby.players),
            started=lobby.started,
            filled=lobby.filled,
            created_at=lobby.created_at,
        )


class RoleView(_FrozenWire):
    is_impostor: bool
    # None for the impostor.
    word: str | None


# --- requests ---
# Loosely typed fields are normalized by the lobby service, matching what the
# browser front end has always sent.


class CreateLobbyRequest(_Wire):
    admin_password: Any = None
    admin_name: Any = None
    max_players: Any = None
    difficulty: Any = None


class JoinLobbyRequest(_Wire):
    code: Any = None
    name: Any = None


class StartGameRequest(_Wire):
    code: Any = None
    admin_password: Any = None


# --- responses ---


class OkResponse(_Wire):
    ok: bool = True


class ErrorResponse(_Wire):
    ok: bool = False
    error: str


class LobbyResponse(OkResponse):
    lobby: LobbySummary


class CreateLobbyResponse(OkResponse):
    code: str
    player_id: int
    lobby: LobbySummary


class JoinLobbyResponse(OkResponse):
    player_id: int
    lobby: LobbySummary


class RoleResponse(OkResponse):
    is_impostor: bool
    word: str | None
