#!/usr/bin/env python3
"""
Generate the bundled color-set datasets.

Writes small.json (CSS) and medium.json (xkcd) into the data directory, plus
large.json when a meodai/color-names CSV is given. Each file is a name-sorted
JSON array of {name, hex, lab}.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from huematch.services import color_sets, datasets

logger = logging.getLogger("generate_color_data")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--out-dir", type=Path, default=color_sets.DATA_DIR,
        help=f"output directory (default: {color_sets.DATA_DIR})",
    )
    parser.add_argument(
        "--colornames-csv", type=Path, default=None,
        help="meodai/color-names CSV for the large set",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s — %(message)s")

    datasets.write_palette(args.out_dir / "small.json", datasets.normalize_entries(datasets.css_entries()))
    datasets.write_palette(args.out_dir / "medium.json", datasets.normalize_entries(datasets.xkcd_entries()))

    if args.colornames_csv is not None:
        entries = datasets.colornames_csv_entries(args.colornames_csv)
        datasets.write_palette(args.out_dir / "large.json", datasets.normalize_entries(entries))
    else:
        logger.warning("No --colornames-csv given; large.json not written")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
