from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from impostor.api.models import LobbyState
from impostor.errors import LobbyAlreadyExists, LobbyNotFound


T = TypeVar("T")


@dataclass(slots=True)
class _Slot:
    lobby: LobbyState
    lock: threading.Lock = field(default_factory=threading.Lock)


class LobbyRegistry:
    """In-process store mapping lobby code -> lobby state.

    Locking:
      - a registry-wide lock guards the code -> slot map (lookup and insert);
      - each lobby has its own lock, held for the whole of a mutation or a read,
        so writes on one lobby never wait on another lobby.

    Mutations run against a deep copy that replaces the stored state only when
    the callback returns normally. A callback that raises leaves the lobby as
    it was.

    Lobbies are never removed; the registry lives as long as the process.
    """

    def __init__(self) -> None:
        self._slots: dict[str, _Slot] = {}
        self._lock = threading.Lock()

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._slots

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def codes(self) -> list[str]:
        with self._lock:
            return list(self._slots)

    def insert(self, code: str, lobby: LobbyState) -> None:
        if lobby.code != code:
            raise ValueError("Lobby code does not match registry key")
        with self._lock:
            if code in self._slots:
                raise LobbyAlreadyExists(code)
            self._slots[code] = _Slot(lobby=lobby.model_copy(deep=True))

    def _slot(self, code: str) -> _Slot:
        with self._lock:
            slot = self._slots.get(code)
        if slot is None:
            raise LobbyNotFound(code)
        return slot

    def get(self, code: str) -> LobbyState:
        """Return a private copy of the lobby; raises LobbyNotFound."""

        slot = self._slot(code)
        with slot.lock:
            return slot.lobby.model_copy(deep=True)

    def read(self, code: str, fn: Callable[[LobbyState], T]) -> T:
        """Run `fn` against a consistent view of the lobby without copying it.

        `fn` must not mutate or retain the lobby it is given.
        """

        slot = self._slot(code)
        with slot.lock:
            return fn(slot.lobby)

    def mutate_exclusive(self, code: str, fn: Callable[[LobbyState], T]) -> T:
        """Apply `fn` to the lobby with single-writer access and return its result.

        This is the only way lobby state changes after insertion.
        """

        slot = self._slot(code)
        with slot.lock:
            draft = slot.lobby.model_copy(deep=True)
            result = fn(draft)
            slot.lobby = draft
            return result
