"""
resolution.py
=============

Choose the resolution k at which two patterns are compared.

Every k from 2 to n is tried. Comparing at a coarse k hides detail, so the
rules dropped relative to full resolution are charged back as a penalty:

    ratio(k) = broken(k) / pairs(k) + (pairs(n) - pairs(k)) / pairs(n)

The k with the smallest ratio wins; exact ties go to the larger k.

Cost is O(n^2) rule evaluations per k, so a full scan is the dominant cost
of a search for long patterns. Patterns of a few hundred points are fine.
"""

import logging
import warnings
from typing import NamedTuple, Sequence

import numpy as np

from ..errors import InvariantViolation, PatternLengthWarning
from .approximation import approximate_series_even_indices
from .ordinal_rules import OrdinalRuleSet

logger = logging.getLogger(__name__)

TIE_TOLERANCE = 1e-9


class ResolutionChoice(NamedTuple):
    """Winning resolution and the penalties measured there."""
    k: int
    broken: float
    total_rules: int
    ratio: float
    total_broken: int


def pair_count(k: int) -> int:
    return k * (k - 1) // 2


def find_optimal_k_relative(series_a: Sequence[float], series_b: Sequence[float]) -> ResolutionChoice:
    """
    Scan k in 2..n, building rules from A and scoring B against them.

    Args:
        series_a: Pattern the rules are derived from (the reference)
        series_b: Pattern checked against those rules

    Returns:
        ResolutionChoice(k, broken, total_rules, ratio, total_broken)
    """
    a = np.asarray(series_a, dtype=float)
    b = np.asarray(series_b, dtype=float)
    if len(a) != len(b):
        warnings.warn("Series lengths differ - truncating to min length for approximation.",
                      PatternLengthWarning, stacklevel=2)
    n = min(len(a), len(b))
    if n < 2:
        raise InvariantViolation(f"Resolution search needs at least 2 points, got {n}")
    a, b = a[:n], b[:n]

    total_rules = pair_count(n)
    best = None

    for k in range(2, n + 1):
        _, vals_a = approximate_series_even_indices(a, k)
        _, vals_b = approximate_series_even_indices(b, k)
        if len(vals_a) != len(vals_b):
            logger.debug("Skipping k=%d: approximation lengths %d != %d", k, len(vals_a), len(vals_b))
            continue

        rules_a = OrdinalRuleSet.from_values(vals_a)
        broken = rules_a.count_broken(vals_b)

        total_broken = pair_count(len(vals_a))
        ratio = broken / total_broken + (total_rules - len(rules_a)) / total_rules

        if best is None or ratio < best.ratio or (abs(ratio - best.ratio) < TIE_TOLERANCE and k > best.k):
            best = ResolutionChoice(k, broken, len(rules_a), ratio, total_broken)

    if best is None:
        raise InvariantViolation("No resolution produced comparable approximations")
    return best
