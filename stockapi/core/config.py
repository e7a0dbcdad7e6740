"""
Configuration helpers for the stock backend.

Routers, the database facade and scripts read a Settings object built from
environment variables instead of fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEVELOPMENT_ENVS = {"dev", "development", "local"}
PRODUCTION_ENVS = {"prod", "production"}

_ENV_DEFAULTS = {
    "development": {"port": 3000, "log_level": "debug"},
    "production": {"port": 8080, "log_level": "info"},
    "test": {"port": 3001, "log_level": "error"},
}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_mode: str
    database_url: str
    data_dir: str
    seed_db: bool
    port: int
    log_level: str
    default_page_size: int
    cors_origins: tuple[str, ...]

    @property
    def is_development(self) -> bool:
        return self.app_env in DEVELOPMENT_ENVS

    @property
    def is_production(self) -> bool:
        return self.app_env in PRODUCTION_ENVS


def _env_profile(app_env: str) -> dict:
    if app_env in PRODUCTION_ENVS:
        return _ENV_DEFAULTS["production"]
    if app_env == "test":
        return _ENV_DEFAULTS["test"]
    return _ENV_DEFAULTS["development"]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").strip().lower()
    profile = _env_profile(app_env)
    origins = tuple(o.strip().rstrip("/") for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip())

    return Settings(
        app_env=app_env,
        db_mode=(os.getenv("DB_MODE") or "").strip().lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        data_dir=os.getenv("LOCAL_DATA_DIR") or os.path.join(os.getcwd(), "localData"),
        seed_db=_bool(os.getenv("SEED_DB"), False),
        port=_int(os.getenv("PORT"), profile["port"]),
        log_level=(os.getenv("LOG_LEVEL") or profile["log_level"]).upper(),
        default_page_size=max(1, _int(os.getenv("DEFAULT_PAGE_SIZE"), 10)),
        cors_origins=origins,
    )
