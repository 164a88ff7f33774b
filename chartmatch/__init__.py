"""
chartmatch
==========

Find historical chart fragments whose shape resembles a reference pattern
and report what followed them.

Two functions form the public surface:

    calculate_similarity(reference, candidate) -> int score, nominally 0-100
    search_similar_patterns(reference, corpus, config) -> ranked SearchMatch list
"""

from .config import EngineSettings, load_engine_settings, load_search_config
from .corpus import build_corpus, candles_from_frame, corpus_key
from .errors import InvariantViolation, PatternLengthWarning
from .models import Candle, Outcome, SearchConfiguration, SearchMatch, SimilarityDiagnostics
from .reporting import OutcomeSummary, matches_to_frame, summarize_outcomes
from .search import PatternSearchEngine, convert_time_to_utc, search_similar_patterns
from .similarity import calculate_similarity, similarity_pair_by_optimal_k

__version__ = '0.1.0'

__all__ = [
    'Candle',
    'Outcome',
    'SearchConfiguration',
    'SearchMatch',
    'SimilarityDiagnostics',
    'EngineSettings',
    'load_engine_settings',
    'load_search_config',
    'build_corpus',
    'candles_from_frame',
    'corpus_key',
    'InvariantViolation',
    'PatternLengthWarning',
    'OutcomeSummary',
    'matches_to_frame',
    'summarize_outcomes',
    'PatternSearchEngine',
    'convert_time_to_utc',
    'search_similar_patterns',
    'calculate_similarity',
    'similarity_pair_by_optimal_k',
]
