"""
Extract Layer Schemas

Normalized records produced by the extractors, and the polars schemas of the
frames built from them.
"""

from dataclasses import dataclass
from typing import Mapping

import polars as pl


@dataclass(frozen=True)
class PlayerMetadata:
    player_id: str
    name: str
    position: str


# playerId -> amount
SalaryMap = Mapping[str, float]

# playerId -> metadata
PlayerMap = Mapping[str, PlayerMetadata]


SALARY_SCHEMA = pl.Schema(
    [
        ("player_id", pl.String()),
        ("salary", pl.Float64()),
    ]
)

PLAYER_SCHEMA = pl.Schema(
    [
        ("player_id", pl.String()),
        ("name", pl.String()),
        ("position", pl.String()),
    ]
)
