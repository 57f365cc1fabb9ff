"""
Color Sets — the bundled reference palettes, loaded once per process.

Each set is read from ``<HUEMATCH_DATA_DIR>/<id>.json`` when that file exists
(see scripts/generate_color_data.py), otherwise built from its source corpus.
The large set has no in-process corpus and needs HUEMATCH_COLORNAMES_CSV.
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from . import datasets
from .palette import NamedColor, prepare_palette

logger = logging.getLogger(__name__)

DATA_DIR = Path(
    os.environ.get("HUEMATCH_DATA_DIR", Path(__file__).parent.parent / "data" / "generated")
)
COLORNAMES_CSV = os.environ.get("HUEMATCH_COLORNAMES_CSV")
DEFAULT_COLOR_SET = "medium"


@dataclass(frozen=True)
class ColorSet:
    id: str
    label: str
    colors: tuple[NamedColor, ...]

    @property
    def count(self) -> int:
        return len(self.colors)


def _colornames_source() -> Optional[list[datasets.SourceEntry]]:
    if not COLORNAMES_CSV:
        return None
    path = Path(COLORNAMES_CSV)
    if not path.exists():
        logger.warning(f"HUEMATCH_COLORNAMES_CSV points at a missing file: {path}")
        return None
    return datasets.colornames_csv_entries(path)


# id → (label, corpus loader). A loader returning None means "not available".
_SOURCES: dict[str, tuple[str, Callable[[], Optional[list[datasets.SourceEntry]]]]] = {
    "large": ("Large · meodai/color-names", _colornames_source),
    "medium": ("Medium · xkcd", datasets.xkcd_entries),
    "small": ("Small · CSS", datasets.css_entries),
}

_loaded: dict[str, Optional[ColorSet]] = {}
_lock = threading.Lock()


def _load(set_id: str) -> Optional[ColorSet]:
    label, source = _SOURCES[set_id]
    path = DATA_DIR / f"{set_id}.json"
    if path.exists():
        colors = datasets.load_palette(path)
        logger.info(f"Loaded color set '{set_id}' from {path} ({len(colors)} colors)")
        return ColorSet(id=set_id, label=label, colors=colors)

    entries = source()
    if entries is None:
        logger.info(f"Color set '{set_id}' unavailable (no dataset at {path})")
        return None
    colors = tuple(datasets.normalize_entries(entries))
    logger.info(f"Built color set '{set_id}' from source ({len(colors)} colors)")
    return ColorSet(id=set_id, label=label, colors=colors)


def _ensure_loaded(set_id: str) -> Optional[ColorSet]:
    with _lock:
        if set_id not in _loaded:
            _loaded[set_id] = _load(set_id)
        return _loaded[set_id]


def get_color_set(set_id: str) -> ColorSet:
    """Return a loaded color set. KeyError if the id is unknown or unavailable."""
    if set_id not in _SOURCES:
        raise KeyError(f"Unknown color set: {set_id!r}")
    color_set = _ensure_loaded(set_id)
    if color_set is None:
        raise KeyError(f"Color set {set_id!r} is not available")
    return color_set


def available_color_sets() -> list[ColorSet]:
    return [cs for cs in (_ensure_loaded(i) for i in _SOURCES) if cs is not None]


def warm_up() -> list[ColorSet]:
    """Load and prepare every available set so the first query pays nothing."""
    sets = available_color_sets()
    for cs in sets:
        prepared = prepare_palette(cs.colors)
        logger.info(f"Prepared '{cs.id}': {len(prepared)} of {cs.count} colors")
    return sets


def reset() -> None:
    """Forget loaded sets; the next access reloads from disk or source."""
    with _lock:
        _loaded.clear()
