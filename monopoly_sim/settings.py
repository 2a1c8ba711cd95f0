"""
Simulation run configuration using pydantic-settings.

Environment variables (prefix: MONOSIM_):
    MONOSIM_GAMES       - Number of games to simulate (default: 1000)
    MONOSIM_PLAYERS     - Players per game (default: 4)
    MONOSIM_MAX_ROUNDS  - Round limit per game (default: 100)
    MONOSIM_WORKERS     - Parallel workers (default: 1 = sequential)
    MONOSIM_SEED        - Seed for reproducible batches (default: random)
    MONOSIM_STRATEGIES  - Comma-separated strategy profiles (default: default)
    MONOSIM_LOG_LEVEL   - Logging level (default: INFO)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from monopoly_sim.config import MAX_PLAYERS, MIN_PLAYERS


class SimulationSettings(BaseSettings):
    """Defaults for a simulation batch; CLI flags override them."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="MONOSIM_",
    )

    games: int = Field(
        default=1000,
        ge=0,
        description="Number of games to simulate.",
    )
    players: int = Field(
        default=4,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
        description="Players per game.",
    )
    max_rounds: int = Field(
        default=100,
        gt=0,
        description="Round limit per game.",
    )
    workers: int = Field(
        default=1,
        gt=0,
        description="Number of parallel workers.",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the batch random stream; unset means nondeterministic.",
    )
    strategies: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["default"],
        description="Strategy profile per seat, or one profile for every seat.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level.",
    )

    @field_validator("strategies", mode="before")
    @classmethod
    def split_strategies(cls, value):
        """Accept 'a,b,c' as well as a list."""
        if isinstance(value, str):
            value = [name.strip() for name in value.split(",") if name.strip()]
        if not value:
            return ["default"]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        return (value or "INFO").upper()


@lru_cache
def get_settings() -> SimulationSettings:
    """Return cached simulation settings instance."""
    return SimulationSettings()
