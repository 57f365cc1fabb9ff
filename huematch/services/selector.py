"""
Selector — bounded top-N selection over a prepared palette.

Results ascend by ΔE; equal ΔE ascends by name in raw code-point order
(``str.__lt__``), never locale order.
"""
from __future__ import annotations

import numpy as np

from .ciede2000 import ciede2000, ciede2000_lab65_batch
from .color_space import Lab
from .palette import MatchResult, PreparedPalette


def _precedes(delta_e: float, name: str, other_delta_e: float, other_name: str) -> bool:
    if delta_e != other_delta_e:
        return delta_e < other_delta_e
    return name < other_name


class Shortlist:
    """
    Ascending list of at most ``limit`` (delta_e, name, index) entries.

    ``offer`` rejects a candidate that does not precede the current worst entry
    when full, so only strict improvements reach the insertion scan.
    """

    def __init__(self, limit: int) -> None:
        self.limit = max(limit, 0)
        self._entries: list[tuple[float, str, int]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def offer(self, delta_e: float, name: str, index: int) -> bool:
        entries = self._entries
        if self.limit == 0:
            return False
        if len(entries) == self.limit:
            worst_delta_e, worst_name, _ = entries[-1]
            if not _precedes(delta_e, name, worst_delta_e, worst_name):
                return False

        insert_at = len(entries)
        for i, (existing_delta_e, existing_name, _) in enumerate(entries):
            if _precedes(delta_e, name, existing_delta_e, existing_name):
                insert_at = i
                break

        entries.insert(insert_at, (delta_e, name, index))
        if len(entries) > self.limit:
            entries.pop()
        return True

    def entries(self) -> list[tuple[float, str, int]]:
        return list(self._entries)


def _to_results(shortlist: Shortlist, prepared: PreparedPalette) -> list[MatchResult]:
    return [
        MatchResult(
            name=name,
            hex=prepared.hexes[index],
            lab=prepared.labs[index],
            delta_e=delta_e,
        )
        for delta_e, name, index in shortlist.entries()
    ]


def select_closest(query_lab65: Lab, prepared: PreparedPalette, limit: int) -> list[MatchResult]:
    """
    Top ``limit`` matches for a Lab65 query, reading the flat Lab65 buffer.

    ΔE is computed for the whole palette at once. Only entries at or below the
    ``limit``-th smallest ΔE can make the shortlist, so only those are offered;
    ties at the cutoff are all offered and settled by name.
    """
    if limit <= 0 or len(prepared) == 0:
        return []

    l1, a1, b1 = query_lab65
    deltas = ciede2000_lab65_batch(l1, a1, b1, prepared.lab65_values.reshape(-1, 3))

    if limit < len(deltas):
        cutoff = np.partition(deltas, limit - 1)[limit - 1]
        candidates = np.flatnonzero(deltas <= cutoff)
    else:
        candidates = np.arange(len(deltas))

    names = prepared.names
    shortlist = Shortlist(limit)
    for index, delta_e in zip(candidates.tolist(), deltas[candidates].tolist()):
        shortlist.offer(delta_e, names[index], index)

    return _to_results(shortlist, prepared)


def select_closest_structured(
    query_lab65: Lab, prepared: PreparedPalette, limit: int,
) -> list[MatchResult]:
    """Same selection as ``select_closest`` through per-entry Lab65 triples."""
    if limit <= 0:
        return []

    shortlist = Shortlist(limit)
    for index, name in enumerate(prepared.names):
        delta_e = ciede2000(query_lab65, prepared.lab65(index))
        shortlist.offer(delta_e, name, index)

    return _to_results(shortlist, prepared)
