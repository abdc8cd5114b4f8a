from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from impostor.api.models import PlayerState
from impostor.rng import RandomSource, system_random


DEFAULT_WORDS: tuple[str, ...] = ("dom", "chmura", "kałamarz", "silnik", "prąd")


@dataclass(frozen=True, slots=True)
class RoleAssignment:
    impostor_id: int
    secret_word: str


def validate_vocabulary(words: Sequence[str]) -> tuple[str, ...]:
    cleaned = tuple(w.strip() for w in words if w and w.strip())
    if len(cleaned) < 2:
        raise ValueError("Vocabulary needs at least 2 words")
    return cleaned


@dataclass(slots=True)
class RoleAssigner:
    """Picks the impostor and the secret word when a game starts.

    Both draws are uniform over the current players and the vocabulary.
    Does not touch the lobby; the caller applies the result.
    """

    words: tuple[str, ...] = DEFAULT_WORDS
    rng: RandomSource = field(default_factory=system_random)

    def __post_init__(self) -> None:
        self.words = validate_vocabulary(self.words)

    def assign_roles(self, players: Sequence[PlayerState]) -> RoleAssignment:
        if not players:
            raise ValueError("Cannot assign roles without players")
        impostor = players[self.rng.randrange(len(players))]
        word = self.words[self.rng.randrange(len(self.words))]
        return RoleAssignment(impostor_id=impostor.id, secret_word=word)
