"""Contract test fixtures: the real app wired to a low-cost container."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))


@pytest.fixture
def container():
    from infrastructure.container import ServiceContainer
    from infrastructure.settings import AppSettings

    settings = AppSettings(
        argon2_time_cost=1,
        argon2_memory_cost=1024,
        argon2_parallelism=1,
        bcrypt_work_factor=4,
    )
    return ServiceContainer(settings)


@pytest.fixture
def app(container):
    from infrastructure.container import get_hashing_service
    from presentation.main import create_app

    application = create_app()
    application.dependency_overrides[get_hashing_service] = lambda: container.hashing_service
    return application


@pytest.fixture
def client(app):
    from starlette.testclient import TestClient

    return TestClient(app, raise_server_exceptions=False)
