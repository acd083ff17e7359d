"""Application settings and environment configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional


_FALSY = {"0", "false", "no", "off"}


@dataclass
class Settings:
    """Runtime configuration resolved from environment variables."""

    app_name: str = "Maternal Health Reminder System"
    data_path: Path = Path("data") / "patients.json"
    reconcile_dispatch: bool = True
    milestones_file: Optional[Path] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        env_app_name = os.getenv("APP_NAME")
        env_data_path = os.getenv("PATIENTS_DATA_PATH")
        env_reconcile = os.getenv("RECONCILE_DISPATCH")
        env_milestones = os.getenv("REMINDER_MILESTONES_FILE")
        env_log_level = os.getenv("LOG_LEVEL")
        if env_app_name:
            self.app_name = env_app_name
        if env_data_path:
            self.data_path = Path(env_data_path)
        if env_reconcile:
            self.reconcile_dispatch = env_reconcile.strip().lower() not in _FALSY
        if env_milestones:
            self.milestones_file = Path(env_milestones)
        if env_log_level:
            self.log_level = env_log_level.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
