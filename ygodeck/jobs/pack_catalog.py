"""
Pack a JSON card list into the binary card catalog.

Run this job whenever the card list changes:

    python -m ygodeck.jobs.pack_catalog cards.json
"""

import argparse
import logging
from pathlib import Path

from ygodeck.config import settings
from ygodeck.services.catalog_store import load_cards_json, write_catalog_file

logger = logging.getLogger(__name__)


def run_pack(source: Path, destination: Path) -> Path:
    """Convert a JSON card list into a binary catalog file."""
    logger.info("Packing card list from %s...", source)

    try:
        cards = load_cards_json(source)
        path = write_catalog_file(destination, cards)
        logger.info("Packed %d cards into %s", len(cards), path)
        return path
    except Exception as e:
        logger.error("Failed to pack card catalog: %s", e)
        raise


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Pack a JSON card list into the binary card catalog.")
    parser.add_argument("source", type=Path, help="JSON card list")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(settings.catalog_path),
        help="Catalog file to write (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_pack(args.source, args.output)


if __name__ == "__main__":
    main()
