# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskhub.config import Settings
from taskhub.container import build_container
from taskhub.db import init_db
from taskhub.main import create_app

from .helpers import register


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings over a per-test sqlite file, with cheap bcrypt."""
    return Settings(
        env="test",
        database_path=tmp_path / "taskhub.db",
        access_token_secret="test-access",
        refresh_token_secret="test-refresh",
        bcrypt_rounds=4,
    )


@pytest.fixture()
def container(settings: Settings):
    """Services wired directly, without HTTP."""
    init_db(settings.database_path)
    return build_container(settings)


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def alice(client: TestClient) -> dict:
    return register(client, "alice")


@pytest.fixture()
def bob(client: TestClient) -> dict:
    return register(client, "bob")
