"""
Position Ranking

Joins reconciled salaries with player metadata and keeps the top N salaries
per position, the same way the pipeline joins facts with dimensions: polars
frames registered in an in-memory DuckDB connection.
"""

import logging
from typing import Any, Dict, Mapping, Sequence

import duckdb
import polars as pl

from mfl_salaries.extract.schemas import PLAYER_SCHEMA, SALARY_SCHEMA, PlayerMap, SalaryMap
from .schemas import RANKED_SCHEMA, RankedEntry, RankedPositions

logger = logging.getLogger(__name__)

# Ties on salary are broken by ascending player id so output is reproducible
RANKING_SQL = """
    WITH joined AS (
        SELECT
            p."position"
            , s.player_id
            , p.name
            , s.salary
        FROM salaries s
        JOIN players p ON s.player_id = p.player_id
        JOIN tracked_positions t ON p."position" = t."position"
    ),
    ranked AS (
        SELECT
            "position"
            , ROW_NUMBER() OVER (
                PARTITION BY "position"
                ORDER BY salary DESC, player_id ASC
            ) AS position_rank
            , player_id
            , name
            , salary
        FROM joined
    )
    SELECT "position", position_rank, player_id, name, salary
    FROM ranked
    WHERE position_rank <= ?
    ORDER BY "position", position_rank
"""


def salaries_to_frame(salaries: SalaryMap) -> pl.DataFrame:
    """playerId -> amount mapping as a frame sorted by player id"""
    player_ids = sorted(salaries)
    return pl.DataFrame(
        {
            "player_id": player_ids,
            "salary": [float(salaries[player_id]) for player_id in player_ids],
        },
        schema=SALARY_SCHEMA,
    )


def players_to_frame(players: PlayerMap) -> pl.DataFrame:
    """playerId -> metadata mapping as a frame"""
    return pl.DataFrame(
        {
            "player_id": list(players),
            "name": [meta.name for meta in players.values()],
            "position": [meta.position for meta in players.values()],
        },
        schema=PLAYER_SCHEMA,
    )


def create_ranked_frame(
    salaries: SalaryMap,
    players: PlayerMap,
    positions: Sequence[str],
    top_n: int,
) -> pl.DataFrame:
    """
    Rank salaries within each tracked position

    Players without metadata, or whose position is not tracked, are dropped by
    the inner joins. That is expected (off-roster or IDP ids) and not an error.

    Args:
        salaries: Reconciled playerId -> amount
        players: playerId -> metadata for the same season
        positions: Positions to keep
        top_n: Maximum entries per position

    Returns:
        pl.DataFrame: Rows with RANKED_SCHEMA, ordered by position then rank
    """
    if top_n <= 0:
        return pl.DataFrame(schema=RANKED_SCHEMA)

    conn = duckdb.connect()
    try:
        conn.register("salaries", salaries_to_frame(salaries))
        conn.register("players", players_to_frame(players))
        conn.register(
            "tracked_positions",
            pl.DataFrame(
                {"position": list(dict.fromkeys(positions))},
                schema={"position": pl.String()},
            ),
        )
        result_df = conn.execute(RANKING_SQL, [top_n]).pl()
    finally:
        conn.close()

    result_df = result_df.rename({"position_rank": "rank"}).cast(RANKED_SCHEMA)
    logger.debug(f"Ranked {result_df.height} players across {len(positions)} positions")
    return result_df


def rank_by_position(
    salaries: SalaryMap,
    players: PlayerMap,
    positions: Sequence[str],
    top_n: int,
) -> RankedPositions:
    """
    Group players by position, sort by salary descending and take the top N

    Every tracked position is present in the result, empty when no player
    qualifies.

    Returns:
        RankedPositions: position -> [RankedEntry, ...]
    """
    ranked: RankedPositions = {position: [] for position in positions}

    ranked_df = create_ranked_frame(salaries, players, positions, top_n)
    for row in ranked_df.iter_rows(named=True):
        ranked[row["position"]].append(
            RankedEntry(rank=row["rank"], name=row["name"], salary=row["salary"])
        )

    return ranked


def get_summary_stats(
    source_sizes: Mapping[str, int],
    merged: SalaryMap,
    ranked: RankedPositions,
) -> Dict[str, Any]:
    """
    Get summary statistics for one season

    Args:
        source_sizes: Source label -> number of players it reported
        merged: Reconciled salaries
        ranked: Ranked output

    Returns:
        Dict: Per-source sizes, merged size and bucket sizes
    """
    return {
        "sources": dict(source_sizes),
        "merged": len(merged),
        "positions": {position: len(entries) for position, entries in ranked.items()},
    }
