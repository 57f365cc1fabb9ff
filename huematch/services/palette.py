"""
Palette — named reference colors and their matching-ready prepared form.

A PreparedPalette holds four index-aligned views of a palette: names, hexes,
stored Lab triples and a flat float64 buffer of Lab65 coordinates (three numbers
per entry). Preparation is memoized per palette *identity* for the life of the
process.
"""
from __future__ import annotations

import logging
import math
import numbers
import threading
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from .color_space import Lab, lab_to_lab65

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedColor:
    name: str
    hex: str     # canonical "#RRGGBB"
    lab: Lab     # D50 Lab, not Lab65

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "hex": self.hex, "lab": list(self.lab)}


@dataclass(frozen=True)
class MatchResult:
    name: str
    hex: str
    lab: Lab
    delta_e: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "hex": self.hex,
            "lab": list(self.lab),
            "delta_e": self.delta_e,
        }


@dataclass(frozen=True)
class PreparedPalette:
    names: tuple[str, ...]
    hexes: tuple[str, ...]
    labs: tuple[Lab, ...]
    lab65_values: np.ndarray   # shape (3 * len(names),), read-only

    def __len__(self) -> int:
        return len(self.names)

    def lab65(self, index: int) -> Lab:
        offset = index * 3
        v = self.lab65_values
        return float(v[offset]), float(v[offset + 1]), float(v[offset + 2])


def _valid_lab(lab: Any) -> bool:
    try:
        if len(lab) != 3:
            return False
        return all(
            isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)
            for v in lab
        )
    except TypeError:
        return False


def build_prepared_palette(palette: Sequence[NamedColor]) -> PreparedPalette:
    """Prepare a palette without consulting the cache."""
    names: list[str] = []
    hexes: list[str] = []
    labs: list[Lab] = []
    lab65: list[float] = []

    for index, color in enumerate(palette):
        lab = getattr(color, "lab", None)
        if not (_valid_lab(lab) and getattr(color, "name", None) and getattr(color, "hex", None)):
            logger.debug(f"Skipping malformed palette entry {index}: {color!r}")
            continue
        lab = (float(lab[0]), float(lab[1]), float(lab[2]))
        names.append(color.name)
        hexes.append(color.hex)
        labs.append(lab)
        lab65.extend(lab_to_lab65(lab))

    values = np.array(lab65, dtype=np.float64)
    values.flags.writeable = False
    return PreparedPalette(
        names=tuple(names),
        hexes=tuple(hexes),
        labs=tuple(labs),
        lab65_values=values,
    )


# id(palette) → (palette, prepared). Holding the palette keeps its id from being
# reused by another object while the entry exists.
_PREPARED_CACHE: dict[int, tuple[Sequence[NamedColor], PreparedPalette]] = {}
_CACHE_LOCK = threading.Lock()


def prepare_palette(palette: Sequence[NamedColor]) -> PreparedPalette:
    """Return the cached PreparedPalette for this palette object, building it once."""
    key = id(palette)
    with _CACHE_LOCK:
        cached = _PREPARED_CACHE.get(key)
    if cached is not None:
        return cached[1]

    prepared = build_prepared_palette(palette)
    with _CACHE_LOCK:
        # Another thread may have published first; keep its object
        _, published = _PREPARED_CACHE.setdefault(key, (palette, prepared))
    if published is prepared:
        logger.debug(f"Prepared palette of {len(prepared)} colors (source {len(palette)})")
    return published


def prepared_cache_size() -> int:
    with _CACHE_LOCK:
        return len(_PREPARED_CACHE)


def clear_prepared_cache() -> None:
    with _CACHE_LOCK:
        _PREPARED_CACHE.clear()
