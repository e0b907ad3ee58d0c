from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Game setup
    random_seed: int | None = None
    shared_gates: bool = False

    # Smart AI
    smart_proximity_weight: float = 0.5

    # Arena
    arena_games: int = 20
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="INDIGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
