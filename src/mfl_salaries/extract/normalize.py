"""
Response Normalization

Defensive helpers shared by every extractor. MFL payloads are loosely shaped:
collections collapse to a single object when they hold one element, numbers
arrive as strings and names are stored as "Last, First".
"""

import math
import re
from typing import Any, List, Optional

UNKNOWN_NAME = "Unknown"

# Team-aggregate and IDP codes that never get a sheet
EXCLUDED_POSITIONS = {
    "TMWR",
    "TMRB",
    "TMDL",
    "TMTE",
    "TMQB",
    "TMPK",
    "TMPN",
    "TMLB",
    "TMDB",
    "ST",
    "OFF",
    "HB",
    "CB",
    "DB",
    "DL",
    "LB",
    "S",
    "DE",
    "DT",
    "FB",
}

POSITION_ALIASES = {
    "QB": "QB",
    "RB": "RB",
    "WR": "WR",
    "TE": "TE",
    "PK": "PK",
    "K": "PK",
    "DEF": "Def",
}

_NAME_PATTERN = re.compile(r"^([^,]+),\s*(.+)$")


def ensure_list(value: Any) -> List[Any]:
    """Treat a lone object as a one-element list and anything empty as []"""
    if not value:
        return []
    if isinstance(value, list):
        return value
    return [value]


def dig(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing"""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def parse_amount(value: Any) -> float:
    """Parse a monetary field; anything unparseable counts as 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def format_name(raw_name: Any) -> str:
    """Convert "Last, First" to "First Last".

    Values without a comma (e.g. "Buffalo Bills") are returned unchanged.
    Missing or non-string names become "Unknown".
    """
    if not raw_name or not isinstance(raw_name, str):
        return UNKNOWN_NAME
    match = _NAME_PATTERN.match(raw_name)
    if not match:
        return raw_name
    return f"{match.group(2).strip()} {match.group(1).strip()}"


def normalize_position(raw_position: Optional[str]) -> Optional[str]:
    """Map a raw MFL position to QB/RB/WR/TE/PK/Def, or None if not tracked"""
    if not raw_position:
        return None
    upper = str(raw_position).strip().upper()
    if upper in EXCLUDED_POSITIONS:
        return None
    return POSITION_ALIASES.get(upper)
