"""
Transformation Layer Schemas

Ranked output types and the schema of the ranking join result.
"""

from dataclasses import dataclass
from typing import Dict, List

import polars as pl


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    name: str
    salary: float


# position -> ranked entries
RankedPositions = Dict[str, List[RankedEntry]]

# season -> ranked entries of one position
SeasonRankings = Dict[int, List[RankedEntry]]

# position -> season -> ranked entries
SeasonReport = Dict[str, SeasonRankings]


RANKED_SCHEMA = pl.Schema(
    [
        ("position", pl.String()),
        ("rank", pl.Int64()),
        ("player_id", pl.String()),
        ("name", pl.String()),
        ("salary", pl.Float64()),
    ]
)
