from __future__ import annotations

import random
from typing import Protocol


class RandomSource(Protocol):
    """Uniform integer source used for codes and role draws.

    `random.SystemRandom` (production) and a seeded `random.Random` (tests)
    both satisfy it.
    """

    def randrange(self, stop: int) -> int: ...


def system_random() -> RandomSource:
    # Backed by os.urandom.
    return random.SystemRandom()
