"""
Color Space — hex parsing and sRGB → CIELAB conversion.

Two Lab flavors share the same tuple shape:

  * Lab   — CIELAB referenced to D50 (the CSS Color 4 ``lab()`` space). This is
            what palettes store and what datasets serialize.
  * Lab65 — CIELAB referenced to D65. Only the CIEDE2000 metric consumes it.

Never feed a Lab triple to the metric without going through ``lab_to_lab65``.
"""
from __future__ import annotations

import math
import re
from typing import Optional

Lab = tuple[float, float, float]

_HEX_PATTERN = re.compile(r"^#?([A-Fa-f0-9]{3}|[A-Fa-f0-9]{6})$")

# CIE constants (exact rational forms)
_EPSILON = 216 / 24389
_KAPPA = 24389 / 27

# Reference whites from their xy chromaticities
_D50_WHITE = (0.3457 / 0.3585, 1.0, (1.0 - 0.3457 - 0.3585) / 0.3585)
_D65_WHITE = (0.3127 / 0.3290, 1.0, (1.0 - 0.3127 - 0.3290) / 0.3290)

# Linear sRGB → XYZ (D65)
_SRGB_TO_XYZ65 = (
    (0.41239079926595934, 0.357584339383878, 0.1804807884018343),
    (0.21263900587151027, 0.715168678767756, 0.07219231536073371),
    (0.01933081871559182, 0.11919477979462598, 0.9505321522496607),
)

# Bradford chromatic adaptation
_D65_TO_D50 = (
    (1.0479298208405488, 0.022946793341019088, -0.05019222954313557),
    (0.029627815688159344, 0.990434484573249, -0.01707382502938514),
    (-0.009243058152591178, 0.015055144896577895, 0.7518742899580008),
)
_D50_TO_D65 = (
    (0.955473421488075, -0.02309845494876471, 0.06325924320057072),
    (-0.0283697093338637, 1.0099953980813041, 0.021041441191917323),
    (0.012314014864481998, -0.020507649298898964, 1.330365926242124),
)


class ColorConversionError(RuntimeError):
    """Raised when finite Lab input produces non-finite output."""


def normalize_hex(value: str) -> Optional[str]:
    """
    Canonicalize a user-supplied hex color to ``#RRGGBB``.

    Accepts surrounding whitespace, an optional ``#`` and 3- or 6-digit forms in
    any case. Returns None for anything else.
    """
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not _HEX_PATTERN.match(trimmed):
        return None

    h = trimmed.lstrip("#")
    if len(h) == 3:
        h = h[0]*2 + h[1]*2 + h[2]*2
    return f"#{h.upper()}"


def is_valid_hex(value: str) -> bool:
    return normalize_hex(value) is not None


def hex_to_rgb(hex_color: str) -> Optional[tuple[int, int, int]]:
    h = normalize_hex(hex_color)
    if h is None:
        return None
    return int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16)


def _linearize(c: float) -> float:
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _mat_mul(m: tuple, x: float, y: float, z: float) -> tuple[float, float, float]:
    return (
        m[0][0] * x + m[0][1] * y + m[0][2] * z,
        m[1][0] * x + m[1][1] * y + m[1][2] * z,
        m[2][0] * x + m[2][1] * y + m[2][2] * z,
    )


def _xyz_to_lab(x: float, y: float, z: float, white: tuple) -> Lab:
    def f(t: float) -> float:
        return t ** (1 / 3) if t > _EPSILON else (_KAPPA * t + 16) / 116

    fx, fy, fz = f(x / white[0]), f(y / white[1]), f(z / white[2])
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def _lab_to_xyz(L: float, a: float, b: float, white: tuple) -> tuple[float, float, float]:
    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    fx3, fz3 = fx ** 3, fz ** 3
    x = fx3 if fx3 > _EPSILON else (116 * fx - 16) / _KAPPA
    y = fy ** 3 if L > _KAPPA * _EPSILON else L / _KAPPA
    z = fz3 if fz3 > _EPSILON else (116 * fz - 16) / _KAPPA
    return x * white[0], y * white[1], z * white[2]


def _rgb_to_lab(r: int, g: int, b: int) -> Lab:
    """Convert RGB (0-255) to CIELAB (D50)."""
    rl, gl, bl = _linearize(r / 255.0), _linearize(g / 255.0), _linearize(b / 255.0)
    x65, y65, z65 = _mat_mul(_SRGB_TO_XYZ65, rl, gl, bl)
    x50, y50, z50 = _mat_mul(_D65_TO_D50, x65, y65, z65)
    return _xyz_to_lab(x50, y50, z50, _D50_WHITE)


def _is_finite(lab: Lab) -> bool:
    return all(math.isfinite(v) for v in lab)


def hex_to_lab(hex_color: str) -> Optional[Lab]:
    """Convert a hex color to Lab (D50). None if the hex is invalid."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    lab = _rgb_to_lab(*rgb)
    if not _is_finite(lab):
        return None
    return lab


def lab_to_lab65(lab: Lab) -> Lab:
    """
    Re-reference a Lab (D50) point to Lab65 (D65) via XYZ and Bradford adaptation.

    Raises ColorConversionError when the result is not finite; with finite input
    that means the conversion pipeline itself is broken.
    """
    L, a, b = lab
    x50, y50, z50 = _lab_to_xyz(L, a, b, _D50_WHITE)
    x65, y65, z65 = _mat_mul(_D50_TO_D65, x50, y50, z50)
    lab65 = _xyz_to_lab(x65, y65, z65, _D65_WHITE)
    if not _is_finite(lab65):
        raise ColorConversionError(f"Lab65 conversion of {lab!r} is not finite: {lab65!r}")
    return lab65


def hex_to_lab65(hex_color: str) -> Optional[Lab]:
    lab = hex_to_lab(hex_color)
    if lab is None:
        return None
    return lab_to_lab65(lab)
