"""
approximation.py
================

Downsample a price series to ``k`` evenly spaced representative points.

The first and last samples are always kept so that the approximation spans
the whole pattern regardless of resolution.
"""

from typing import List, Sequence, Tuple

import numpy as np

from ..common import round_half_up


def even_index(i: int, n: int, k: int) -> int:
    """Index of the i-th of k evenly spaced points over [0, n-1]."""
    return round_half_up(i * (n - 1) / (k - 1))


def _refill(idx: List[int], n: int, k: int) -> List[int]:
    """Top up deduplicated grid indices to exactly ``min(k, n)`` sorted entries.

    Probes continue along the same grid past ``i = k-1``; probes landing
    outside ``[0, n-1]`` are skipped, and once the grid is exhausted the
    lowest unused indices fill whatever is left.
    """
    target = min(k, n)
    idx = sorted(set(idx))
    present = set(idx)
    probe = 0
    while len(idx) < target and probe < n * k:
        cand = even_index(probe, n, k)
        if cand < n and cand not in present:
            idx.append(cand)
            present.add(cand)
        probe += 1

    for cand in range(n):
        if len(idx) >= target:
            break
        if cand not in present:
            idx.append(cand)
            present.add(cand)

    return sorted(idx)


def approximate_series_even_indices(series: Sequence[float], k: int) -> Tuple[List[int], List[float]]:
    """
    Return (indices, values) for an approximation with k points.

    Args:
        series: Ordered samples (list, tuple or 1-d numpy array)
        k: Target resolution, at least 2

    Returns:
        Ascending indices into ``series`` and the values found there.
        Both have length ``min(k, len(series))``.
    """
    if k < 2:
        raise ValueError(f"Approximation needs at least 2 points, got k={k}")

    values = np.asarray(series, dtype=float)
    n = len(values)

    if k >= n:
        idx = list(range(n))
    else:
        # Rounding may collapse neighbours; refill along the same grid.
        idx = _refill([even_index(i, n, k) for i in range(k)], n, k)

    return idx, values[idx].tolist()
