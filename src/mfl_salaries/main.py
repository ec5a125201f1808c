"""
Main Entry Point - MFL Salary Top N Exporter

Fetches every configured season, reconciles salaries, ranks them per position
and writes the workbook. Exits 0 on success, 1 on any failure.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mfl_salaries.coreutils.config import ExportConfig, parse_seasons
from mfl_salaries.coreutils.logging import setup_logging
from mfl_salaries.load.workbook import create_workbook, save_workbook
from mfl_salaries.orchestration.pipeline import SalaryPipeline

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MFL Salary Top N Exporter")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Workbook path (default: mfl-salary-top<N>-<date>.xlsx)",
    )
    parser.add_argument(
        "--seasons",
        type=parse_seasons,
        default=None,
        help="Comma separated seasons, e.g. 2023,2024",
    )
    parser.add_argument(
        "--top-n", type=int, default=None, help="Players kept per position"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser.parse_args(argv)


def run_export(config: ExportConfig, output: Optional[Path] = None) -> str:
    """
    Run the full export

    Args:
        config: Export settings
        output: Optional workbook path overriding the dated default

    Returns:
        str: Path of the written workbook
    """
    report = SalaryPipeline(config).run()

    wb = create_workbook(report, config.seasons, config.positions, config.top_n)
    return save_workbook(wb, output or config.output_path())


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = _parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(log_level)

    try:
        config = ExportConfig.from_env().with_overrides(
            seasons=args.seasons, top_n=args.top_n
        )
        if config.top_n <= 0:
            raise ValueError(f"--top-n must be positive, got {config.top_n}")

        logger.info(f"MFL Salary Top {config.top_n} Exporter")
        logger.info(
            f"League: {config.league_id} | "
            f"Years: {', '.join(str(s) for s in config.seasons)} | "
            f"Positions: {', '.join(config.positions)}"
        )
        logger.info("Sources: W1 Rosters + W14 Rosters + Auction Results + BBID Waivers")

        filename = run_export(config, args.output)

        logger.info("")
        logger.info("=" * 60)
        logger.info(f"Done! Exported to {filename}")
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
