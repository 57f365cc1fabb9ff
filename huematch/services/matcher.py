"""
Matcher — hex color → closest named colors of a palette by CIEDE2000.
"""
from __future__ import annotations

from typing import Sequence, Union

from .color_space import hex_to_lab, lab_to_lab65
from .palette import MatchResult, NamedColor, PreparedPalette, prepare_palette
from .selector import select_closest

DEFAULT_LIMIT = 10


def find_closest_colors(
    input_hex: str,
    palette: Union[Sequence[NamedColor], PreparedPalette],
    limit: int = DEFAULT_LIMIT,
) -> list[MatchResult]:
    """
    Return up to ``limit`` palette colors closest to ``input_hex``.

    Invalid or partial hex input yields an empty list rather than an error, as
    does ``limit <= 0``.
    """
    if limit <= 0:
        return []

    lab = hex_to_lab(input_hex)
    if lab is None:
        return []

    prepared = palette if isinstance(palette, PreparedPalette) else prepare_palette(palette)
    return select_closest(lab_to_lab65(lab), prepared, limit)
