from __future__ import annotations

from dataclasses import dataclass, field

from impostor.rng import RandomSource, system_random

CODE_LENGTH = 8
CODE_SPACE = 10**CODE_LENGTH


@dataclass(slots=True)
class CodeGenerator:
    """Draws lobby codes uniformly from 00000000..99999999.

    The generator is stateless; uniqueness is the caller's job (draw, then
    try to insert into the registry).
    """

    rng: RandomSource = field(default_factory=system_random)

    def generate(self) -> str:
        return str(self.rng.randrange(CODE_SPACE)).zfill(CODE_LENGTH)


def is_valid_code(code: object) -> bool:
    return isinstance(code, str) and len(code) == CODE_LENGTH and code.isascii() and code.isdigit()
