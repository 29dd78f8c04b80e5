import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

DEV_PLATFORM = "dev"
DEFAULT_TOKEN_TTL_SECONDS = 60 * 60  # 1 hour


class ConfigError(Exception):
    """Required configuration is missing or invalid."""


@dataclass
class Settings:
    db_path: str
    jwt_secret: str
    platform: str = "prod"
    filepath_root: Path = Path(".")
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS

    @property
    def is_dev(self) -> bool:
        return self.platform == DEV_PLATFORM

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(seconds=self.token_ttl_seconds)

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = os.environ.get("CHIRPY_DATA_DIR", "./data")
        ttl_raw = os.environ.get("TOKEN_TTL_SECONDS", str(DEFAULT_TOKEN_TTL_SECONDS))
        try:
            ttl = int(ttl_raw)
        except ValueError as e:
            raise ConfigError(f"TOKEN_TTL_SECONDS must be an integer, got {ttl_raw!r}") from e

        return cls(
            db_path=os.environ.get("CHIRPY_DB_PATH", f"{data_dir}/chirpy.db"),
            jwt_secret=os.environ.get("JWT_SECRET", ""),
            platform=os.environ.get("PLATFORM", "prod"),
            filepath_root=Path(os.environ.get("FILEPATH_ROOT", ".")),
            token_ttl_seconds=ttl,
        )


def validate_settings(settings: Settings) -> None:
    """
    Fail fast on configuration the service cannot run without.
    """
    missing = []
    if not settings.jwt_secret:
        missing.append("JWT_SECRET")
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    if settings.token_ttl_seconds <= 0:
        raise ConfigError("TOKEN_TTL_SECONDS must be positive")

    if not settings.filepath_root.is_dir():
        logger.warning("FILEPATH_ROOT %s is not a directory", settings.filepath_root)


@lru_cache
def load_settings() -> Settings:
    return Settings.from_env()
