"""
Pipeline Orchestrator - Season by Season

For every configured season, strictly one request at a time:
1. Extract: week 1 rosters, week 14 rosters, auction results, BBID waivers,
   player metadata (each followed by a rate-limit pause)
2. Transform: reconcile the four salary sources, rank per position
3. Collect: store each position's ranking under the season

Any fetch failure aborts the whole run. There is no partial report.
"""

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from mfl_salaries.coreutils.config import ExportConfig

# Extract layer imports
from mfl_salaries.extract.extractors import (
    extract_auction_salaries,
    extract_player_metadata,
    extract_roster_salaries,
    extract_waiver_salaries,
)
from mfl_salaries.extract.mfl_api import MFLAPIClient

# Transform layer imports
from mfl_salaries.transformation.ranking import get_summary_stats, rank_by_position
from mfl_salaries.transformation.reconcile import reconcile
from mfl_salaries.transformation.schemas import RankedPositions, SeasonReport

logger = logging.getLogger(__name__)


class SalaryPipeline:
    """Orchestrates fetch -> reconcile -> rank across all seasons"""

    def __init__(
        self,
        config: Optional[ExportConfig] = None,
        client: Optional[MFLAPIClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the pipeline

        Args:
            config: Export settings (defaults to ExportConfig())
            client: API client (built from config if not provided)
            sleep: Pause function used between requests
        """
        self.config = config or ExportConfig()
        self.client = client or MFLAPIClient(self.config)
        self.sleep = sleep

    def _pause(self) -> None:
        self.sleep(self.config.request_delay)

    def collect_season(self, season: int) -> Tuple[RankedPositions, Dict]:
        """
        Fetch the four salary sources and metadata for one season, then rank

        Args:
            season: Season year

        Returns:
            Tuple: (position -> ranked entries, summary stats)
        """
        logger.info("")
        logger.info("=" * 60)
        logger.info(f"Fetching {season}...")

        source_maps = {}

        # Sources 1 and 2: roster snapshots (carry-over contracts, dropped players)
        for week in self.config.roster_weeks:
            source_maps[f"W{week}"] = extract_roster_salaries(
                self.client.get_rosters(season, week)
            )
            self._pause()

        # Source 3: auction results (authoritative for newly auctioned players)
        source_maps["Auction"] = extract_auction_salaries(
            self.client.get_auction_results(season)
        )
        self._pause()

        # Source 4: BBID waiver claims
        source_maps["BBID"] = extract_waiver_salaries(
            self.client.get_waiver_transactions(season)
        )
        self._pause()

        # Names and positions
        players = extract_player_metadata(self.client.get_players(season))
        self._pause()

        merged = reconcile(source_maps.values())
        ranked = rank_by_position(
            merged, players, self.config.positions, self.config.top_n
        )

        stats = get_summary_stats(
            {label: len(salaries) for label, salaries in source_maps.items()},
            merged,
            ranked,
        )
        counts = " | ".join(f"{label}: {size}" for label, size in stats["sources"].items())
        logger.info(f"  {counts} | Merged: {stats['merged']}")
        for position, size in stats["positions"].items():
            logger.info(f"    {position:<4} top {size}")

        return ranked, stats

    def run(self) -> SeasonReport:
        """
        Process every configured season in order

        Returns:
            SeasonReport: position -> season -> ranked entries

        Raises:
            FetchError: If any request exhausts its retries
        """
        report: SeasonReport = {position: {} for position in self.config.positions}

        for season in self.config.seasons:
            ranked, _ = self.collect_season(season)
            for position in self.config.positions:
                report[position][season] = ranked[position]

        return report
