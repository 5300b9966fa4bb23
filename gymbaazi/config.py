"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Host configuration, read from ``GYMBAAZI_*`` environment variables (or .env).

    Workout policy (rotation, recovery window, catalog TTLs, validation
    bounds) lives in ``gymbaazi/workouts/workout_config.yaml``, not here.
    """

    # --- App ---
    app_name: str = "GymBaazi"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Storage ---
    data_dir: str = "./data"  # one JSON file per record key
    cache_dir: str = "./data/cache"  # exercise catalog disk cache

    # --- Exercise catalog ---
    catalog_source: str = "exercisedb"
    exercisedb_base_url: str | None = None  # overrides workout_config.yaml when set
    http_timeout_seconds: float = 30.0

    # --- Session ---
    recover_on_startup: bool = True

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "GYMBAAZI_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
