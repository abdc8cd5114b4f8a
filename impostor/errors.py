from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    validation = "validation"
    auth = "auth"
    not_found = "not_found"
    state_conflict = "state_conflict"
    internal = "internal"


class LobbyError(Exception):
    """Base class for every error a lobby operation can report.

    Carries a machine-readable `kind` and a human-readable `message`; the HTTP
    boundary maps the kind to a status code.
    """

    kind: ErrorKind = ErrorKind.internal

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(LobbyError):
    kind = ErrorKind.validation


class AuthError(LobbyError):
    kind = ErrorKind.auth


class NotFoundError(LobbyError):
    kind = ErrorKind.not_found


class StateConflictError(LobbyError):
    kind = ErrorKind.state_conflict


class InternalError(LobbyError):
    kind = ErrorKind.internal


class LobbyNotFound(NotFoundError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__("Lobby not found")


class LobbyAlreadyExists(InternalError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Lobby code already in use: {code}")
