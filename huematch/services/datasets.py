"""
Datasets — build, serialize and load named-color palettes.

A dataset on disk is a JSON array of ``{"name", "hex", "lab": [L, a, b]}``
records sorted by name, one file per color set. Sources:

  * CSS   — CSS3 color keywords from webcolors
  * xkcd  — the xkcd color survey, as shipped by matplotlib
  * meodai/color-names — ~30k names, read from its CSV distribution file
"""
from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Iterable, Optional

import webcolors

from .color_space import hex_to_lab
from .palette import NamedColor

logger = logging.getLogger(__name__)

SourceEntry = tuple[str, str]  # (name, hex)

_SIX_DIGIT_HEX = re.compile(r"^[A-Fa-f0-9]{6}$")


def to_named_color(name: str, hex_color: str) -> Optional[NamedColor]:
    """Convert one raw (name, hex) row. Only full 6-digit hex is accepted."""
    cleaned = hex_color.strip()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]
    if not _SIX_DIGIT_HEX.match(cleaned):
        return None

    name = name.strip()
    if not name:
        return None

    hex_ = f"#{cleaned.upper()}"
    lab = hex_to_lab(hex_)
    if lab is None:
        return None
    return NamedColor(name=name, hex=hex_, lab=lab)


def normalize_entries(entries: Iterable[SourceEntry]) -> list[NamedColor]:
    colors = []
    skipped = 0
    for name, hex_color in entries:
        color = to_named_color(name, hex_color)
        if color is None:
            skipped += 1
            continue
        colors.append(color)
    if skipped:
        logger.info(f"Dropped {skipped} unusable source entries")
    colors.sort(key=lambda c: c.name)
    return colors


# ─────────────────────────────────────────────────────────────────────────────
# Sources
# ─────────────────────────────────────────────────────────────────────────────

def css_entries() -> list[SourceEntry]:
    return [(name, webcolors.name_to_hex(name, spec="css3")) for name in webcolors.names("css3")]


def xkcd_entries() -> list[SourceEntry]:
    # matplotlib.colors is only needed when the xkcd set is built from source
    from matplotlib.colors import XKCD_COLORS

    return [(key.replace("xkcd:", "", 1), hex_) for key, hex_ in XKCD_COLORS.items()]


def colornames_csv_entries(path: Path | str) -> list[SourceEntry]:
    """Read a meodai/color-names style CSV (header row with ``name`` and ``hex``)."""
    with Path(path).open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or not {"name", "hex"} <= set(reader.fieldnames):
            raise ValueError(f"{path}: expected 'name' and 'hex' columns, got {reader.fieldnames}")
        return [(row["name"] or "", row["hex"] or "") for row in reader]


# ─────────────────────────────────────────────────────────────────────────────
# Serialization
# ─────────────────────────────────────────────────────────────────────────────

def dump_palette(colors: Iterable[NamedColor]) -> str:
    records = [c.to_dict() for c in colors]
    return json.dumps(records, ensure_ascii=False, separators=(",", ":")) + "\n"


def write_palette(path: Path | str, colors: Iterable[NamedColor]) -> int:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    colors = list(colors)
    path.write_text(dump_palette(colors), encoding="utf-8")
    logger.info(f"{path.name}: {len(colors)} colors")
    return len(colors)


def _parse_record(index: int, record: object) -> NamedColor:
    if not isinstance(record, dict):
        raise ValueError(f"record {index}: expected an object, got {type(record).__name__}")
    try:
        name, hex_, lab = record["name"], record["hex"], record["lab"]
    except KeyError as e:
        raise ValueError(f"record {index}: missing field {e}") from e
    if not isinstance(lab, list) or len(lab) != 3:
        raise ValueError(f"record {index}: 'lab' must be a 3-element array")
    return NamedColor(name=name, hex=hex_, lab=(float(lab[0]), float(lab[1]), float(lab[2])))


def load_palette(path: Path | str) -> tuple[NamedColor, ...]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of colors")
    return tuple(_parse_record(i, record) for i, record in enumerate(data))
