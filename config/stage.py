from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from config.storage import get_session_store_path

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.staging"


class StageSettings(BaseSettings):
    APP_ENV: str = "stage"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    SIMULATED_LATENCY_MS: int = 250

    # Session storage components
    STATE_DIR: str = "/tmp/maintrack"
    SESSION_FILE: str = "session.json"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )

    @property
    def SESSION_STORE_PATH(self) -> str:
        """Construct session storage path from components"""
        return get_session_store_path(
            directory=self.STATE_DIR,
            filename=self.SESSION_FILE,
        )
