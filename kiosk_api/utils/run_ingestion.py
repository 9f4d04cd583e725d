"""
Run one price ingestion cycle from the command line.

Usage:
    kiosk-ingest --zone J
    python -m kiosk_api.utils.run_ingestion --zone J --date 2025-10-18
"""

import argparse
import logging
import sys
from datetime import date

from ..exceptions import KioskError
from ..models import IngestResponse


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch electricity prices and rebuild windows")
    parser.add_argument("--zone", default=None, help="Pricing zone (default: configured zone)")
    parser.add_argument("--date", dest="trading_day", type=date.fromisoformat, default=None,
                        help="Trading day in YYYY-MM-DD format (default: today)")
    parser.add_argument("--no-simulate", action="store_true",
                        help="Fail instead of falling back to simulated prices")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def print_stats(result: IngestResponse) -> None:
    """Print ingestion results in a readable format."""
    print("\n" + "=" * 50)
    print("PRICE INGESTION RESULTS")
    print("=" * 50)
    print(f"📡 Source used: {result.data_source.value}")
    print(f"💲 Prices stored: {result.prices}")
    print(f"🪟 Windows built: {result.windows}")
    print(f"📊 Breakpoints: p25={result.percentiles.p25} "
          f"p50={result.percentiles.p50} p75={result.percentiles.p75}")
    print("=" * 50)


def main(argv=None) -> int:
    """Main function for command-line usage."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    from ..config import ApplicationConfig
    from ..services import PriceIngestionService

    config = ApplicationConfig()
    if args.no_simulate:
        config.feed = config.feed.model_copy(update={"simulate_on_failure": False})

    service = PriceIngestionService(config=config)
    try:
        result = service.run_ingestion(zone=args.zone, trading_day=args.trading_day)
    except KioskError as e:
        print(f"❌ Error: {e}")
        return 1

    print_stats(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
