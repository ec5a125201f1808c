"""
Source Extractors

Pure functions turning one raw MFL response into a normalized mapping.
No I/O here: the API client fetches, these functions only read the payload.

Malformed records (missing ids, unparseable or non-positive amounts) are
skipped, never raised. Duplicate player ids keep the highest amount.
"""

import logging
from typing import Any, Dict

from .normalize import dig, ensure_list, format_name, normalize_position, parse_amount
from .schemas import PlayerMetadata

logger = logging.getLogger(__name__)


def _record_max(salary_map: Dict[str, float], player_id: str, amount: float) -> None:
    salary_map[player_id] = max(salary_map.get(player_id, 0.0), amount)


def extract_roster_salaries(data: Any) -> Dict[str, float]:
    """
    Extract salaries from a rosters export

    Args:
        data: Raw response of TYPE=rosters

    Returns:
        Dict[str, float]: playerId -> salary
    """
    salary_map: Dict[str, float] = {}
    skipped = 0

    for franchise in ensure_list(dig(data, "rosters", "franchise")):
        if not isinstance(franchise, dict):
            continue
        for player in ensure_list(franchise.get("player")):
            if not isinstance(player, dict) or not player.get("id"):
                skipped += 1
                continue
            salary = parse_amount(player.get("salary"))
            if salary > 0:
                _record_max(salary_map, str(player["id"]), salary)
            else:
                skipped += 1

    logger.debug(f"Roster salaries: {len(salary_map)} players, {skipped} skipped")
    return salary_map


def extract_auction_salaries(data: Any) -> Dict[str, float]:
    """
    Extract winning bids from an auctionResults export

    Auction results are the authoritative source for newly auctioned players;
    the roster salary field does not always reflect the winning bid.
    """
    salary_map: Dict[str, float] = {}

    for auction in ensure_list(dig(data, "auctionResults", "auctionUnit", "auction")):
        if not isinstance(auction, dict) or not auction.get("player"):
            continue
        bid = parse_amount(auction.get("winningBid"))
        if bid > 0:
            _record_max(salary_map, str(auction["player"]), bid)

    logger.debug(f"Auction salaries: {len(salary_map)} players")
    return salary_map


def parse_waiver_transaction(transaction: Any) -> Dict[str, float]:
    """
    Parse one BBID_WAIVER transaction string

    Format is "droppedIds|bidAmount|addedIds", e.g. "14867,|425000|13593,"
    means drop 14867, bid 425000, add 13593.

    Returns:
        Dict[str, float]: added playerId -> bid (empty when malformed)
    """
    if not isinstance(transaction, str) or not transaction:
        return {}

    parts = transaction.split("|")
    if len(parts) < 3:
        return {}

    bid = parse_amount(parts[1])
    if bid <= 0:
        return {}

    added_ids = [token.strip() for token in parts[2].split(",")]
    return {player_id: bid for player_id in added_ids if player_id}


def extract_waiver_salaries(data: Any) -> Dict[str, float]:
    """Extract bid amounts for every player added through a BBID waiver claim"""
    salary_map: Dict[str, float] = {}

    for tx in ensure_list(dig(data, "transactions", "transaction")):
        if not isinstance(tx, dict):
            continue
        for player_id, bid in parse_waiver_transaction(tx.get("transaction")).items():
            _record_max(salary_map, player_id, bid)

    logger.debug(f"Waiver salaries: {len(salary_map)} players")
    return salary_map


def extract_player_metadata(data: Any) -> Dict[str, PlayerMetadata]:
    """
    Extract display names and positions from a players export

    Players with an untracked position are left out entirely; that is what
    later drops them from ranking.
    """
    player_map: Dict[str, PlayerMetadata] = {}

    for player in ensure_list(dig(data, "players", "player")):
        if not isinstance(player, dict) or not player.get("id"):
            continue
        position = normalize_position(player.get("position"))
        if position is None:
            continue

        player_id = str(player["id"])
        player_map[player_id] = PlayerMetadata(
            player_id=player_id,
            name=format_name(player.get("name")),
            position=position,
        )

    logger.debug(f"Player metadata: {len(player_map)} players")
    return player_map
