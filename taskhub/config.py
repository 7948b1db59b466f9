"""Application settings loaded once from environment variables (+ optional .env).

Business code never reads the environment: a `Settings` instance is built at
startup and handed to `build_container()`.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKHUB"

DEV_ACCESS_SECRET = "dev-access-secret"
DEV_REFRESH_SECRET = "dev-refresh-secret"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    """Read a stripped env var; blank counts as unset."""
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_int(name: str, default: int) -> int:
    """Read an int env var, falling back to `default` when unset or malformed."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration for the API process."""

    app_name: str = "TaskHub"
    env: str = "development"

    database_path: Path = Path("taskhub.db")

    # ---- Tokens ----
    access_token_secret: str = DEV_ACCESS_SECRET
    refresh_token_secret: str = DEV_REFRESH_SECRET
    access_token_ttl: int = 3600
    refresh_token_ttl: int = 7 * 24 * 3600
    jwt_algorithm: str = "HS256"

    bcrypt_rounds: int = 12

    # ---- Server / logging ----
    log_level: str = "INFO"
    log_file: Path | None = None
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_production(self) -> bool:
        """Production hides error details and requires real token secrets."""
        return self.env == "production"

    @staticmethod
    def from_env() -> "Settings":
        """Build settings from TASKHUB_* variables, loading `.env` if present."""
        load_dotenv(override=False)

        env = _env(_k("ENV"), "development").lower()
        access_secret = _env(_k("JWT_SECRET"), "")
        refresh_secret = _env(_k("JWT_REFRESH_SECRET"), "")
        if env == "production" and not (access_secret and refresh_secret):
            raise RuntimeError(
                f"{_k('JWT_SECRET')} and {_k('JWT_REFRESH_SECRET')} must be set in production"
            )

        log_file = _env(_k("LOG_FILE"), "")

        return Settings(
            app_name=_env(_k("APP_NAME"), "TaskHub"),
            env=env,
            database_path=Path(_env(_k("DATABASE_PATH"), "taskhub.db")).expanduser(),
            access_token_secret=access_secret or DEV_ACCESS_SECRET,
            refresh_token_secret=refresh_secret or DEV_REFRESH_SECRET,
            access_token_ttl=_env_int(_k("JWT_EXPIRE_SECONDS"), 3600),
            refresh_token_ttl=_env_int(_k("JWT_REFRESH_EXPIRE_SECONDS"), 7 * 24 * 3600),
            jwt_algorithm=_env(_k("JWT_ALGORITHM"), "HS256"),
            bcrypt_rounds=_env_int(_k("BCRYPT_ROUNDS"), 12),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
            host=_env(_k("HOST"), "0.0.0.0"),
            port=_env_int(_k("PORT"), 8000),
        )
