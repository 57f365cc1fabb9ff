"""
CIEDE2000 — perceptual color difference between two Lab65 points.

Reference: Sharma, Wu & Dalal, "The CIEDE2000 Color-Difference Formula:
Implementation Notes, Supplementary Test Data, and Mathematical Observations"
(2005). Parametric factors kL = kC = kH = 1.
"""
from __future__ import annotations

import math

import numpy as np

from .color_space import Lab

_POW25_7 = 25.0 ** 7
_TWO_PI = 2 * math.pi

_DEG_30 = math.radians(30)
_DEG_6 = math.radians(6)
_DEG_63 = math.radians(63)


def ciede2000_lab65(
    l1: float, a1: float, b1: float,
    l2: float, a2: float, b2: float,
) -> float:
    """
    ΔE00 between (l1, a1, b1) and (l2, a2, b2), both in Lab65.

    Takes scalars so the matching loop can call it straight off the flat
    coordinate buffer.
    """
    c1 = math.sqrt(a1 * a1 + b1 * b1)
    c2 = math.sqrt(a2 * a2 + b2 * b2)
    c_bar = (c1 + c2) * 0.5
    if c_bar == 0:
        # both colors achromatic: a' is zero whatever g is
        g = 0.0
    else:
        c_bar7 = c_bar ** 7
        g = 0.5 * (1 - math.sqrt(c_bar7 / (c_bar7 + _POW25_7)))

    a1p = a1 * (1 + g)
    a2p = a2 * (1 + g)
    c1p = math.sqrt(a1p * a1p + b1 * b1)
    c2p = math.sqrt(a2p * a2p + b2 * b2)

    h1p = 0.0 if a1p == 0 and b1 == 0 else math.atan2(b1, a1p)
    if h1p < 0:
        h1p += _TWO_PI
    h2p = 0.0 if a2p == 0 and b2 == 0 else math.atan2(b2, a2p)
    if h2p < 0:
        h2p += _TWO_PI

    dlp = l2 - l1
    dcp = c2p - c1p

    chroma_product = c1p * c2p
    if chroma_product == 0:
        dhp_angle = 0.0
    else:
        dhp_angle = h2p - h1p
        if dhp_angle > math.pi:
            dhp_angle -= _TWO_PI
        elif dhp_angle < -math.pi:
            dhp_angle += _TWO_PI
    dhp = 2 * math.sqrt(chroma_product) * math.sin(dhp_angle / 2)

    lp_avg = (l1 + l2) * 0.5
    cp_avg = (c1p + c2p) * 0.5

    if chroma_product == 0:
        hp_avg = h1p + h2p
    else:
        hp_avg = (h1p + h2p) * 0.5
        if abs(h1p - h2p) > math.pi:
            hp_avg -= math.pi
        if hp_avg < 0:
            hp_avg += _TWO_PI

    lp50_sq = (lp_avg - 50) * (lp_avg - 50)
    t = (
        1
        - 0.17 * math.cos(hp_avg - _DEG_30)
        + 0.24 * math.cos(2 * hp_avg)
        + 0.32 * math.cos(3 * hp_avg + _DEG_6)
        - 0.20 * math.cos(4 * hp_avg - _DEG_63)
    )

    sl = 1 + (0.015 * lp50_sq) / math.sqrt(20 + lp50_sq)
    sc = 1 + 0.045 * cp_avg
    sh = 1 + 0.015 * cp_avg * t

    delta_theta = _DEG_30 * math.exp(-(((math.degrees(hp_avg) - 275) / 25) ** 2))
    cp_avg7 = cp_avg ** 7
    rc = 2 * math.sqrt(cp_avg7 / (cp_avg7 + _POW25_7))
    rt = -math.sin(2 * delta_theta) * rc

    dl = dlp / sl
    dc = dcp / sc
    dh = dhp / sh
    return math.sqrt(dl * dl + dc * dc + dh * dh + rt * dc * dh)


def ciede2000(lab1: Lab, lab2: Lab) -> float:
    """Structured form of ``ciede2000_lab65`` taking two Lab65 triples."""
    return ciede2000_lab65(lab1[0], lab1[1], lab1[2], lab2[0], lab2[1], lab2[2])


def ciede2000_lab65_batch(l1: float, a1: float, b1: float, labs: np.ndarray) -> np.ndarray:
    """
    ΔE00 from one Lab65 point to every row of an (n, 3) Lab65 array.

    Same formula and degeneracies as ``ciede2000_lab65``, evaluated for the
    whole palette in one pass.
    """
    l2, a2, b2 = labs[:, 0], labs[:, 1], labs[:, 2]

    c1 = math.sqrt(a1 * a1 + b1 * b1)
    c2 = np.sqrt(a2 * a2 + b2 * b2)
    c_bar = (c1 + c2) * 0.5
    c_bar7 = c_bar ** 7
    g = np.where(c_bar == 0, 0.0, 0.5 * (1 - np.sqrt(c_bar7 / (c_bar7 + _POW25_7))))

    a1p = a1 * (1 + g)
    a2p = a2 * (1 + g)
    c1p = np.sqrt(a1p * a1p + b1 * b1)
    c2p = np.sqrt(a2p * a2p + b2 * b2)

    h1p = np.where((a1p == 0) & (b1 == 0), 0.0, np.arctan2(b1, a1p))
    h1p = np.where(h1p < 0, h1p + _TWO_PI, h1p)
    h2p = np.where((a2p == 0) & (b2 == 0), 0.0, np.arctan2(b2, a2p))
    h2p = np.where(h2p < 0, h2p + _TWO_PI, h2p)

    dlp = l2 - l1
    dcp = c2p - c1p

    chroma_product = c1p * c2p
    achromatic = chroma_product == 0
    dhp_angle = h2p - h1p
    dhp_angle = np.where(dhp_angle > math.pi, dhp_angle - _TWO_PI, dhp_angle)
    dhp_angle = np.where(dhp_angle < -math.pi, dhp_angle + _TWO_PI, dhp_angle)
    dhp_angle = np.where(achromatic, 0.0, dhp_angle)
    dhp = 2 * np.sqrt(chroma_product) * np.sin(dhp_angle / 2)

    lp_avg = (l1 + l2) * 0.5
    cp_avg = (c1p + c2p) * 0.5

    hp_avg = (h1p + h2p) * 0.5
    hp_avg = np.where(np.abs(h1p - h2p) > math.pi, hp_avg - math.pi, hp_avg)
    hp_avg = np.where(hp_avg < 0, hp_avg + _TWO_PI, hp_avg)
    hp_avg = np.where(achromatic, h1p + h2p, hp_avg)

    lp50_sq = (lp_avg - 50) * (lp_avg - 50)
    t = (
        1
        - 0.17 * np.cos(hp_avg - _DEG_30)
        + 0.24 * np.cos(2 * hp_avg)
        + 0.32 * np.cos(3 * hp_avg + _DEG_6)
        - 0.20 * np.cos(4 * hp_avg - _DEG_63)
    )

    sl = 1 + (0.015 * lp50_sq) / np.sqrt(20 + lp50_sq)
    sc = 1 + 0.045 * cp_avg
    sh = 1 + 0.015 * cp_avg * t

    delta_theta = _DEG_30 * np.exp(-(((np.degrees(hp_avg) - 275) / 25) ** 2))
    cp_avg7 = cp_avg ** 7
    rc = 2 * np.sqrt(cp_avg7 / (cp_avg7 + _POW25_7))
    rt = -np.sin(2 * delta_theta) * rc

    dl = dlp / sl
    dc = dcp / sc
    dh = dhp / sh
    return np.sqrt(dl * dl + dc * dc + dh * dh + rt * dc * dh)
