from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from chirpy.adapters.auth.passwords import Argon2PasswordHasher
from chirpy.adapters.auth.tokens import JWTTokenService
from chirpy.adapters.sqlite.migrator import SQLiteMigrator
from chirpy.api.main import create_app
from chirpy.app_shell.config import Settings

TEST_SECRET = "test-secret"


class MockTimePort:
    """Mock time port for deterministic testing."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


@pytest.fixture
def time_port() -> MockTimePort:
    return MockTimePort()


@pytest.fixture
def hasher() -> Argon2PasswordHasher:
    # Minimum argon2 cost keeps the suite fast.
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def token_service(time_port: MockTimePort) -> JWTTokenService:
    return JWTTokenService(clock=time_port)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    path = str(tmp_path / "data" / "chirpy.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def static_root(tmp_path: Path) -> Path:
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    return root


def make_settings(db_path: str, static_root: Path, platform: str = "dev") -> Settings:
    return Settings(
        db_path=db_path,
        jwt_secret=TEST_SECRET,
        platform=platform,
        filepath_root=static_root,
    )


@pytest.fixture
def settings(db_path: str, static_root: Path) -> Settings:
    return make_settings(db_path, static_root)


@pytest.fixture
def client(settings: Settings, hasher: Argon2PasswordHasher):
    app = create_app(settings, password_hasher=hasher)
    with TestClient(app) as c:
        yield c
