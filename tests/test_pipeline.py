"""
Unit Tests for the Salary Pipeline

Runs the orchestrator against a mocked API client:
- end-to-end reconcile and rank for a season
- request order and rate-limit pauses
- empty seasons and fetch failures
"""

import unittest
from unittest.mock import MagicMock, Mock, call

from mfl_salaries.coreutils.config import ExportConfig
from mfl_salaries.coreutils.request import FetchError
from mfl_salaries.orchestration.pipeline import SalaryPipeline
from mfl_salaries.transformation.schemas import RankedEntry


def _rosters(*players):
    return {"rosters": {"franchise": [{"id": "0001", "player": list(players)}]}}


def _players(*players):
    return {"players": {"player": list(players)}}


def make_client(season_payloads):
    """Mock client whose responses depend on the season"""
    client = MagicMock()
    client.get_rosters.side_effect = lambda season, week: season_payloads[season][f"W{week}"]
    client.get_auction_results.side_effect = lambda season: season_payloads[season]["auction"]
    client.get_waiver_transactions.side_effect = lambda season: season_payloads[season]["waivers"]
    client.get_players.side_effect = lambda season: season_payloads[season]["players"]
    return client


SEASON_2024 = {
    # QB 100: W1 only 1,000,000, auction 1,500,000
    "W1": _rosters({"id": "100", "salary": "1000000"}, {"id": "200", "salary": "300000"}),
    "W14": _rosters({"id": "200", "salary": "350000"}),
    "auction": {
        "auctionResults": {
            "auctionUnit": {"auction": {"player": "100", "winningBid": "1500000"}}
        }
    },
    "waivers": {"transactions": {"transaction": {"transaction": "14867,|425000|13593,"}}},
    "players": _players(
        {"id": "100", "name": "Allen, Josh", "position": "QB"},
        {"id": "200", "name": "Henry, Derrick", "position": "RB"},
        {"id": "13593", "name": "Nacua, Puka", "position": "WR"},
        {"id": "999", "name": "Smith, Corner", "position": "CB"},
    ),
}

EMPTY_SEASON = {
    "W1": {"rosters": {}},
    "W14": {"rosters": {}},
    "auction": {"auctionResults": {}},
    "waivers": {"transactions": {}},
    "players": {"players": {}},
}


class TestSalaryPipeline(unittest.TestCase):
    def setUp(self):
        self.config = ExportConfig(seasons=(2023, 2024), request_delay=0.5)
        self.sleep = Mock()

    def test_end_to_end_max_salary_wins(self):
        client = make_client({2023: EMPTY_SEASON, 2024: SEASON_2024})
        pipeline = SalaryPipeline(self.config, client=client, sleep=self.sleep)

        report = pipeline.run()

        self.assertEqual(report["QB"][2024], [RankedEntry(1, "Josh Allen", 1500000.0)])
        self.assertEqual(report["RB"][2024], [RankedEntry(1, "Derrick Henry", 350000.0)])
        self.assertEqual(report["WR"][2024], [RankedEntry(1, "Puka Nacua", 425000.0)])

    def test_empty_buckets_are_kept(self):
        client = make_client({2023: EMPTY_SEASON, 2024: SEASON_2024})
        report = SalaryPipeline(self.config, client=client, sleep=self.sleep).run()

        self.assertEqual(list(report), ["QB", "RB", "WR", "TE", "PK", "Def"])
        for position in report:
            self.assertEqual(list(report[position]), [2023, 2024])
            self.assertEqual(report[position][2023], [])
        self.assertEqual(report["TE"][2024], [])
        self.assertEqual(report["Def"][2024], [])

    def test_requests_are_sequential_with_pauses(self):
        client = make_client({2023: EMPTY_SEASON, 2024: SEASON_2024})
        SalaryPipeline(self.config, client=client, sleep=self.sleep).run()

        client.get_rosters.assert_has_calls(
            [call(2023, 1), call(2023, 14), call(2024, 1), call(2024, 14)]
        )
        self.assertEqual(client.get_players.call_count, 2)
        # five requests per season, each followed by a pause
        self.assertEqual(self.sleep.call_args_list, [call(0.5)] * 10)

    def test_collect_season_stats(self):
        client = make_client({2024: SEASON_2024})
        pipeline = SalaryPipeline(self.config, client=client, sleep=self.sleep)

        ranked, stats = pipeline.collect_season(2024)

        self.assertEqual(
            stats["sources"], {"W1": 2, "W14": 1, "Auction": 1, "BBID": 1}
        )
        self.assertEqual(stats["merged"], 3)
        self.assertEqual(stats["positions"]["QB"], 1)
        self.assertEqual(len(ranked["QB"]), 1)

    def test_fetch_failure_aborts_run(self):
        client = make_client({2023: EMPTY_SEASON, 2024: SEASON_2024})
        client.get_auction_results.side_effect = FetchError(
            "https://mfl.test/2023/export", "HTTP 503: Service Unavailable"
        )
        pipeline = SalaryPipeline(self.config, client=client, sleep=self.sleep)

        with self.assertRaises(FetchError):
            pipeline.run()

        # nothing after the failing request is attempted
        client.get_waiver_transactions.assert_not_called()
        client.get_players.assert_not_called()


if __name__ == "__main__":
    unittest.main()
