"""
Export Configuration

Fixed settings for one export run (league, seasons, positions, thresholds).
Defaults can be overridden from the environment or a local .env file.
"""

import os
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_LEAGUE_ID = "13522"
DEFAULT_BASE_URL = "https://www49.myfantasyleague.com"
DEFAULT_SEASONS = (2021, 2022, 2023, 2024, 2025)
DEFAULT_POSITIONS = ("QB", "RB", "WR", "TE", "PK", "Def")


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)


def parse_seasons(value: str) -> Tuple[int, ...]:
    """Parse a comma separated season list such as "2021,2022"."""
    seasons = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            seasons.append(int(token))
        except ValueError:
            raise ValueError(f"Invalid season: {token!r}") from None
    if not seasons:
        raise ValueError(f"No seasons found in {value!r}")
    return tuple(seasons)


def _positive_int(name: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def _non_negative_float(name: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if number < 0:
        raise ValueError(f"{name} must not be negative, got {number}")
    return number


@dataclass(frozen=True)
class ExportConfig:
    """Immutable settings passed into the pipeline"""

    league_id: str = DEFAULT_LEAGUE_ID
    base_url: str = DEFAULT_BASE_URL
    seasons: Tuple[int, ...] = DEFAULT_SEASONS
    positions: Tuple[str, ...] = DEFAULT_POSITIONS
    top_n: int = 30
    roster_weeks: Tuple[int, ...] = (1, 14)
    waiver_count: int = 500

    # Requests
    request_delay: float = 1.0
    max_retries: int = 3
    retry_backoff: float = 1.5
    request_timeout: int = 30

    output_dir: Path = field(default_factory=lambda: Path("."))

    def output_path(self, today: Optional[date] = None) -> Path:
        """Workbook path, e.g. mfl-salary-top30-2025-01-31.xlsx"""
        today = today or date.today()
        filename = f"mfl-salary-top{self.top_n}-{today.strftime('%Y-%m-%d')}.xlsx"
        return Path(self.output_dir) / filename

    def with_overrides(self, **changes) -> "ExportConfig":
        """Return a copy with the non-None values in changes applied"""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ExportConfig":
        """Build a config from MFL_* environment variables (and .env)."""
        load_dotenv(dotenv_path)  # take environment variables from .env

        overrides = {}
        if env_get("MFL_LEAGUE_ID"):
            overrides["league_id"] = env_get("MFL_LEAGUE_ID").strip()
        if env_get("MFL_BASE_URL"):
            overrides["base_url"] = env_get("MFL_BASE_URL").strip().rstrip("/")
        if env_get("MFL_SEASONS"):
            overrides["seasons"] = parse_seasons(env_get("MFL_SEASONS"))
        if env_get("MFL_TOP_N"):
            overrides["top_n"] = _positive_int("MFL_TOP_N", env_get("MFL_TOP_N"))
        if env_get("MFL_REQUEST_DELAY"):
            overrides["request_delay"] = _non_negative_float(
                "MFL_REQUEST_DELAY", env_get("MFL_REQUEST_DELAY")
            )
        if env_get("MFL_OUTPUT_DIR"):
            overrides["output_dir"] = Path(env_get("MFL_OUTPUT_DIR"))

        return cls(**overrides)
