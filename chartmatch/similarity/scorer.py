"""
scorer.py
=========

Public similarity entry points.

The score is one-directional: rules come from the reference pattern and
the candidate is judged against them, so ``similarity(A, B)`` need not
equal ``similarity(B, A)``.
"""

import logging
import warnings
from typing import Sequence, Tuple

import numpy as np

from ..common import round_half_up
from ..errors import PatternLengthWarning
from ..models import Candle, SimilarityDiagnostics
from .resolution import find_optimal_k_relative

logger = logging.getLogger(__name__)


def closes(pattern: Sequence[Candle]) -> np.ndarray:
    return np.fromiter((c.close for c in pattern), dtype=float, count=len(pattern))


def similarity_pair_by_optimal_k(series_a: Sequence[float],
                                 series_b: Sequence[float]) -> Tuple[float, SimilarityDiagnostics]:
    """
    Raw similarity ``1 - ratio`` at the optimal resolution, with diagnostics.

    Mismatched lengths are truncated to the shorter series with a
    PatternLengthWarning. The raw value is not clipped: a candidate that
    breaks most late-anchored rules can push it below 0.
    """
    a = np.asarray(series_a, dtype=float)
    b = np.asarray(series_b, dtype=float)
    n = min(len(a), len(b))

    if len(a) != len(b):
        warnings.warn("Series lengths differ - truncating to min length for similarity calculation.",
                      PatternLengthWarning, stacklevel=2)
        logger.warning("Truncating patterns of length %d and %d to %d", len(a), len(b), n)
        a, b = a[:n], b[:n]

    choice = find_optimal_k_relative(a, b)
    sim = 1 - choice.ratio

    info = SimilarityDiagnostics(
        n=n,
        k=choice.k,
        broken=choice.broken,
        total_broken=choice.total_broken,
        total_rules=choice.total_rules,
        ratio=choice.ratio,
        similarity=sim,
    )
    return sim, info


def score_from_raw(raw_similarity: float, clamp: bool = False) -> int:
    score = round_half_up(100 * raw_similarity)
    if clamp:
        score = min(100, max(0, score))
    return score


def calculate_similarity(reference_pattern: Sequence[Candle],
                         candidate_pattern: Sequence[Candle],
                         clamp: bool = False) -> int:
    """
    Similarity score between two candle patterns, nominally 0-100.

    Only closes are compared. With ``clamp=False`` (the default) the score
    is reported exactly as computed and may fall outside [0, 100] for
    adversarial inputs; ``clamp=True`` clips it.
    """
    sim, _ = similarity_pair_by_optimal_k(closes(reference_pattern), closes(candidate_pattern))
    return score_from_raw(sim, clamp=clamp)
