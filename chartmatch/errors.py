"""
errors.py
=========

Exception and warning types raised by the chartmatch core.

Malformed caller input raises ``ValueError``; states that the algorithm
guarantees can never be reached raise ``InvariantViolation``.
"""


class InvariantViolation(AssertionError):
    """An internal guarantee of the similarity algorithm was broken."""


class PatternLengthWarning(UserWarning):
    """Two patterns of different lengths were compared and truncated."""
