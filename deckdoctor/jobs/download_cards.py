"""
Download the static card tables.

Run this job to refresh the card list and stats tables the catalog is
built from:

    python -m deckdoctor.jobs.download_cards [--output-dir DIR]
"""

import argparse
import asyncio
import logging
from pathlib import Path

from deckdoctor.services.card_catalog import download_card_tables

logger = logging.getLogger(__name__)


async def run_download(output_dir: Path | None = None) -> list[Path]:
    """Download the card list and both stats tables."""
    logger.info("Downloading card tables...")

    try:
        paths = await download_card_tables(output_dir)
        logger.info("Downloaded %d card tables", len(paths))
    except Exception as e:
        logger.error("Failed to download card tables: %s", e)
        raise

    return paths


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Download DeckDoctor card tables")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to write the JSON tables to (default: configured data_dir)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download(args.output_dir))


if __name__ == "__main__":
    main()
