#!/usr/bin/env python3
"""
Benchmark find_closest_colors on every available color set.

Compares a cold matcher (palette prepared from scratch on each query) with the
cached facade and reports ms/query, ops/s and speedup.
"""
from __future__ import annotations

import argparse
import sys
import time
from typing import Callable

from huematch.services import color_sets
from huematch.services.color_space import hex_to_lab65
from huematch.services.matcher import find_closest_colors
from huematch.services.palette import build_prepared_palette
from huematch.services.selector import select_closest

QUERIES = [
    "#FF5733", "#00AACC", "#7D3C98", "#F1C40F", "#2ECC71",
    "#123456", "#ABCDEF", "#0F0F0F", "#FA8072", "#4B0082",
]
WARMUP_RUNS = 20


def run_bench(iterations: int, matcher: Callable[[str], object]) -> tuple[float, float]:
    """Return (average ms per query, ops per second)."""
    for i in range(WARMUP_RUNS):
        matcher(QUERIES[i % len(QUERIES)])

    start = time.perf_counter()
    for i in range(iterations):
        matcher(QUERIES[i % len(QUERIES)])
    elapsed = time.perf_counter() - start

    avg_ms = elapsed * 1000 / iterations
    return avg_ms, 1000 / avg_ms


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark the color matcher")
    parser.add_argument("--iterations", type=int, default=200)
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument(
        "--target-ms", type=float, default=None,
        help="fail (exit 1) if the cached matcher exceeds this on the largest set",
    )
    args = parser.parse_args()

    sets = sorted(color_sets.available_color_sets(), key=lambda cs: cs.count)
    if not sets:
        print("no color sets available", file=sys.stderr)
        return 1

    failed = False
    for cs in sets:
        def cold(query: str, colors=cs.colors):
            return select_closest(hex_to_lab65(query), build_prepared_palette(colors), args.limit)

        def cached(query: str, colors=cs.colors):
            return find_closest_colors(query, colors, args.limit)

        cold_ms, cold_ops = run_bench(args.iterations, cold)
        cached_ms, cached_ops = run_bench(args.iterations, cached)

        print(f"\n{cs.id.upper()} ({cs.count} colors)")
        print(f"  cold (prepare per query): {cold_ms:.3f} ms/query ({cold_ops:.1f} ops/s)")
        print(
            f"  cached: {cached_ms:.3f} ms/query ({cached_ops:.1f} ops/s) "
            f"speedup {cold_ms / cached_ms:.2f}x"
        )

        if args.target_ms is not None and cs is sets[-1]:
            passed = cached_ms < args.target_ms
            print(f"  target (< {args.target_ms}ms): {'PASS' if passed else 'FAIL'}")
            failed = failed or not passed

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
