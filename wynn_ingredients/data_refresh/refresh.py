"""
Rebuild the static ingredient catalog from the live item database.

Usage:
    python -m wynn_ingredients.data_refresh.refresh [--out PATH] [--verbose]
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import DEFAULT_REFRESH_CONFIG
from .pipeline import run_refresh
from .sources import ItemSourceError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Refresh the ingredient catalog JSON.")
    ap.add_argument(
        "--out",
        type=Path,
        default=None,
        help=f"Catalog output path (default: {DEFAULT_REFRESH_CONFIG.catalog_path})",
    )
    ap.add_argument("--verbose", action="store_true", help="Log debug output")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run_refresh(DEFAULT_REFRESH_CONFIG, output_path=args.out)
    except ItemSourceError:
        logger.error("Data refresh failed", exc_info=True)
        return 1

    print(f"Refresh complete. Saved {result.ingredient_count} ingredients to: {result.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
