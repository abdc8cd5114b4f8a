from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from impostor.roles import DEFAULT_WORDS, validate_vocabulary


DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "static"


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    admin_password: str = "admin"
    words: tuple[str, ...] = DEFAULT_WORDS
    static_dir: Path = DEFAULT_STATIC_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        raw_port = env.get("PORT", "3000")
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from e

        raw_words = env.get("IMPOSTOR_WORDS")
        words = validate_vocabulary(raw_words.split(",")) if raw_words else DEFAULT_WORDS

        static_dir = env.get("IMPOSTOR_STATIC_DIR")

        return cls(
            host=env.get("HOST", "0.0.0.0"),
            port=port,
            admin_password=env.get("ADMIN_PASSWORD", "admin"),
            words=words,
            static_dir=Path(static_dir) if static_dir else DEFAULT_STATIC_DIR,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
