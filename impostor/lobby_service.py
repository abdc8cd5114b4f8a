from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from statemachine.exceptions import TransitionNotAllowed

from impostor.api.models import (
    DEFAULT_DIFFICULTY,
    Difficulty,
    LobbyState,
    LobbySummary,
    PlayerState,
    RoleView,
)
from impostor.codes import CodeGenerator, is_valid_code
from impostor.errors import (
    AuthError,
    InternalError,
    LobbyAlreadyExists,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from impostor.fsm import LobbyFSM
from impostor.lobby_store import LobbyRegistry
from impostor.roles import RoleAssigner

logger = logging.getLogger(__name__)


MIN_PLAYERS = 3
MAX_PLAYERS = 12
DEFAULT_MAX_PLAYERS = 3
MAX_NAME_LENGTH = 32
MAX_CODE_ATTEMPTS = 1000
ADMIN_PLAYER_ID = 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _now_ms() -> int:
    return int(time.time() * 1000)


def clean_name(name: Any) -> str:
    """Trim, then cut to 32 characters. Empty result means 'no name'; non-strings count as empty."""

    if not isinstance(name, str):
        return ""
    return name.strip()[:MAX_NAME_LENGTH]


def normalize_max_players(value: Any) -> int:
    """Parse like an integer prefix, fall back to 3 for junk or 0, clamp to [3, 12]."""

    parsed: int | None = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if value == value and abs(value) != float("inf") else None
    elif isinstance(value, str):
        m = _INT_PREFIX.match(value)
        parsed = int(m.group(1)) if m else None

    if not parsed:
        parsed = DEFAULT_MAX_PLAYERS
    return min(max(parsed, MIN_PLAYERS), MAX_PLAYERS)


def normalize_difficulty(value: Any) -> Difficulty:
    if isinstance(value, str) and value in {d.value for d in Difficulty}:
        return Difficulty(value)
    return DEFAULT_DIFFICULTY


@dataclass(frozen=True, slots=True)
class CreatedLobby:
    player_id: int
    lobby: LobbySummary


@dataclass(frozen=True, slots=True)
class JoinedLobby:
    player_id: int
    lobby: LobbySummary


@dataclass(slots=True)
class LobbyService:
    """Create/join/start/query operations over a LobbyRegistry.

    Every write goes through `LobbyRegistry.mutate_exclusive`, and every check
    runs before any field is touched, so a failed call leaves the lobby as it
    was. Administrator credentials are checked by the caller and arrive here as
    an `authorized` flag.
    """

    registry: LobbyRegistry
    codes: CodeGenerator = field(default_factory=CodeGenerator)
    roles: RoleAssigner = field(default_factory=RoleAssigner)
    clock: Callable[[], int] = _now_ms

    def create_lobby(
        self,
        *,
        admin_name: Any,
        max_players: Any = None,
        difficulty: Any = None,
        authorized: bool,
    ) -> CreatedLobby:
        if not authorized:
            raise AuthError("Wrong administrator password")

        name = clean_name(admin_name)
        if not name:
            raise ValidationError("Admin name is required")

        limit = normalize_max_players(max_players)
        level = normalize_difficulty(difficulty)
        created_at = self.clock()

        for _ in range(MAX_CODE_ATTEMPTS):
            code = self.codes.generate()
            if code in self.registry:
                logger.warning("Lobby code collision, drawing again")
                continue

            lobby = LobbyState(
                code=code,
                difficulty=level,
                max_players=limit,
                players=[PlayerState(id=ADMIN_PLAYER_ID, name=name, is_admin=True)],
                created_at=created_at,
            )
            try:
                self.registry.insert(code, lobby)
            except LobbyAlreadyExists:
                # Lost a race with a concurrent creation.
                logger.warning("Lobby code collision, drawing again")
                continue

            logger.info("Lobby %s created (max_players=%s, difficulty=%s)", code, limit, level.value)
            return CreatedLobby(player_id=ADMIN_PLAYER_ID, lobby=LobbySummary.from_state(lobby))

        raise InternalError("Could not allocate a lobby code")

    def join_lobby(self, *, code: Any, name: Any) -> JoinedLobby:
        code = self._require_code(code)
        player_name = clean_name(name)

        def _join(lobby: LobbyState) -> JoinedLobby:
            if lobby.started:
                raise StateConflictError("Game already started")
            if lobby.filled:
                raise StateConflictError("Lobby is full")
            if not player_name:
                raise ValidationError("Player name is required")
            folded = player_name.casefold()
            if any(p.name.casefold() == folded for p in lobby.players):
                raise StateConflictError("This name is already taken in this lobby")

            player = PlayerState(id=len(lobby.players) + 1, name=player_name, is_admin=False)
            lobby.players.append(player)
            return JoinedLobby(player_id=player.id, lobby=LobbySummary.from_state(lobby))

        joined = self.registry.mutate_exclusive(code, _join)
        logger.info("Player %s joined lobby %s", joined.player_id, code)
        return joined

    def start_game(self, *, code: Any, authorized: bool) -> LobbySummary:
        code = self._require_code(code)

        def _start(lobby: LobbyState) -> LobbySummary:
            if not authorized:
                raise AuthError("Wrong administrator password")

            fsm = LobbyFSM(lobby)
            try:
                fsm.begin()
            except TransitionNotAllowed as e:
                raise StateConflictError("Game already started") from e

            if len(lobby.players) < MIN_PLAYERS:
                raise StateConflictError(f"At least {MIN_PLAYERS} players are required")

            try:
                assignment = self.roles.assign_roles(lobby.players)
            except Exception as e:
                raise InternalError("Could not assign roles") from e

            fsm.sync_phase_to_model()
            lobby.impostor_id = assignment.impostor_id
            lobby.secret_word = assignment.secret_word
            return LobbySummary.from_state(lobby)

        summary = self.registry.mutate_exclusive(code, _start)
        logger.info("Game started in lobby %s with %s players", code, len(summary.players))
        return summary

    def query_summary(self, *, code: Any) -> LobbySummary:
        code = self._require_code(code)
        return self.registry.read(code, LobbySummary.from_state)

    def query_role(self, *, code: Any, player_id: int | None) -> RoleView:
        code = self._require_code(code)

        def _role(lobby: LobbyState) -> RoleView:
            if not lobby.started:
                raise StateConflictError("Game has not started yet")
            player = lobby.find_player(player_id) if player_id is not None else None
            if player is None:
                raise NotFoundError("Player not found")
            is_impostor = player.id == lobby.impostor_id
            return RoleView(is_impostor=is_impostor, word=None if is_impostor else lobby.secret_word)

        return self.registry.read(code, _role)

    @staticmethod
    def _require_code(code: Any) -> str:
        # Anything that is not an 8-digit string can never name a lobby.
        if not is_valid_code(code):
            raise NotFoundError("Lobby not found")
        return code
