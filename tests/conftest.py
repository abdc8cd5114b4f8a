from __future__ import annotations

import random
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from impostor.codes import CodeGenerator
from impostor.config import Settings
from impostor.lobby_service import LobbyService
from impostor.lobby_store import LobbyRegistry
from impostor.main import create_app
from impostor.roles import RoleAssigner

from tests.helpers import ADMIN_PASSWORD, CREATED_AT, WORDS


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    # Point static files at an empty location so tests only see the API.
    return Settings(admin_password=ADMIN_PASSWORD, words=WORDS, static_dir=tmp_path / "no-static")


@pytest.fixture()
def registry() -> LobbyRegistry:
    return LobbyRegistry()


@pytest.fixture()
def service(registry: LobbyRegistry) -> LobbyService:
    rng = random.Random(1234)
    return LobbyService(
        registry=registry,
        codes=CodeGenerator(rng=rng),
        roles=RoleAssigner(words=WORDS, rng=rng),
        clock=lambda: CREATED_AT,
    )


@pytest.fixture()
def client(settings: Settings, service: LobbyService) -> Generator[TestClient, None, None]:
    app = create_app(settings, service=service)
    with TestClient(app) as c:
        yield c
