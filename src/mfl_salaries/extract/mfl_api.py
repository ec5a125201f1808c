"""
MFL API Client - Pure I/O Operations

This module handles all export API calls to MyFantasyLeague with no business
logic. Returns raw JSON payloads that the extractors turn into mappings.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

from mfl_salaries.coreutils.config import ExportConfig
from mfl_salaries.coreutils.request import fetch_json, new_session

logger = logging.getLogger(__name__)

# Export TYPE discriminators
ROSTERS = "rosters"
AUCTION_RESULTS = "auctionResults"
TRANSACTIONS = "transactions"
PLAYERS = "players"

BBID_WAIVER = "BBID_WAIVER"


class MFLAPIClient:
    """Pure API client for the MFL export endpoint of one league"""

    def __init__(
        self,
        config: Optional[ExportConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or ExportConfig()
        self.session = session or new_session()

    def build_params(self, export_type: str, **extra: str) -> Dict[str, str]:
        """Query parameters shared by every request plus the source specific ones"""
        params = {"L": self.config.league_id, "JSON": "1", "TYPE": export_type}
        params.update({key: str(value) for key, value in extra.items()})
        return params

    def build_url(self, season: int, params: Optional[Dict[str, str]] = None) -> str:
        """Season scoped export URL, e.g. https://host/2024/export?L=13522&JSON=1"""
        url = f"{self.config.base_url}/{season}/export"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _get(self, season: int, params: Dict[str, str], label: str) -> Any:
        url = self.build_url(season, params)
        logger.info(f"  {label:<16} {url}")
        return fetch_json(
            self.session,
            url,
            max_attempts=self.config.max_retries,
            backoff_seconds=self.config.retry_backoff,
            timeout=self.config.request_timeout,
        )

    def get_rosters(self, season: int, week: int) -> Any:
        """
        Fetch roster snapshots of every franchise for a given week

        Args:
            season: Season year
            week: Week number of the snapshot

        Returns:
            Raw rosters payload
        """
        params = self.build_params(ROSTERS, W=week)
        return self._get(season, params, f"Rosters (W{week}):")

    def get_auction_results(self, season: int) -> Any:
        """Fetch auction results (winning bids) for a season"""
        params = self.build_params(AUCTION_RESULTS)
        return self._get(season, params, "Auction Results:")

    def get_waiver_transactions(self, season: int) -> Any:
        """Fetch BBID waiver transactions for a season"""
        params = self.build_params(
            TRANSACTIONS, TRANS_TYPE=BBID_WAIVER, COUNT=self.config.waiver_count
        )
        return self._get(season, params, "BBID Waivers:")

    def get_players(self, season: int) -> Any:
        """Fetch the player database (names and positions) for a season"""
        params = self.build_params(PLAYERS, DETAILS=1)
        return self._get(season, params, "Players:")
