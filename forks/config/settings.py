"""Pydantic Settings — reads from .env, provides typed config singleton."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from forks.config.constants import (
    DEFAULT_SAVE_SLOT,
    END_AGE,
    MIN_EVENTS_BEFORE_EXHAUSTION,
    START_AGE,
)

BUNDLED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ── Storage Paths ─────────────────────────────────────────────
    data_dir: Path = Field(default=Path("data"))
    db_path: Path = Field(default=Path("data/forks.db"))
    log_dir: Path = Field(default=Path("data/logs"))
    log_level: str = Field(default="DEBUG", description="Level for the rotating file log")

    # ── Catalogues ────────────────────────────────────────────────
    questions_path: Path = Field(
        default=BUNDLED_DATA_DIR / "questions.json",
        description="Assessment question catalogue (JSON)",
    )
    scenarios_path: Path = Field(
        default=BUNDLED_DATA_DIR / "scenarios.json",
        description="Life scenario catalogue (JSON)",
    )

    # ── Persistence ───────────────────────────────────────────────
    save_slot: str = Field(
        default=DEFAULT_SAVE_SLOT,
        description="Key under which the session snapshot is stored",
    )

    # ── Simulation ────────────────────────────────────────────────
    start_age: int = Field(default=START_AGE)
    end_age: int = Field(default=END_AGE)
    min_events_before_exhaustion: int = Field(
        default=MIN_EVENTS_BEFORE_EXHAUSTION,
        description="History length required before an empty catalogue ends the run",
    )
    rng_seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible scenario selection (empty = unseeded)",
    )

    @field_validator("start_age")
    @classmethod
    def validate_start_age(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"start_age must be >= 0, got {v}")
        return v

    @field_validator("end_age")
    @classmethod
    def validate_end_age(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"end_age must be > 0, got {v}")
        return v

    def ensure_data_dirs(self) -> None:
        """Create all data directories if they don't exist."""
        for path in [self.data_dir, self.db_path.parent, self.log_dir]:
            path.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings singleton. Reads .env on first call."""
    return Settings()
