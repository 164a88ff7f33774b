"""
Ordinal shape similarity
========================

Approximation, pairwise rank rules, resolution selection and scoring.
"""

from .approximation import approximate_series_even_indices
from .ordinal_rules import (
    OrdinalRule,
    OrdinalRuleSet,
    generate_pairwise_rules,
    count_broken_rules_against,
)
from .resolution import ResolutionChoice, find_optimal_k_relative
from .scorer import calculate_similarity, similarity_pair_by_optimal_k

__all__ = [
    'approximate_series_even_indices',
    'OrdinalRule',
    'OrdinalRuleSet',
    'generate_pairwise_rules',
    'count_broken_rules_against',
    'ResolutionChoice',
    'find_optimal_k_relative',
    'calculate_similarity',
    'similarity_pair_by_optimal_k',
]
