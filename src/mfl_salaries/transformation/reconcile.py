"""
Salary Reconciliation

Combines the per-source salary mappings of one season into a single salary
per player. No single source is complete: roster snapshots miss players
dropped between snapshots, auction results miss players carried over from a
previous season, and waiver bids only cover claimed players. Amounts are only
ever corrected upward across sources, so the highest observation wins.
"""

import logging
from functools import reduce
from typing import Dict, Iterable, Mapping

logger = logging.getLogger(__name__)


def merge(target: Mapping[str, float], source: Mapping[str, float]) -> Dict[str, float]:
    """
    Combine two salary mappings keeping the max amount per player

    Neither input is modified.

    Args:
        target: playerId -> amount
        source: playerId -> amount

    Returns:
        Dict[str, float]: max(target[id], source[id]) for every id in either
    """
    merged = dict(target)
    for player_id, amount in source.items():
        merged[player_id] = max(merged.get(player_id, 0.0), amount)
    return merged


def reconcile(sources: Iterable[Mapping[str, float]]) -> Dict[str, float]:
    """Fold any number of salary mappings into one; input order does not matter"""
    return reduce(merge, sources, {})
