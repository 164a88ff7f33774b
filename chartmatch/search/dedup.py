"""
dedup.py
========

Per-series scan state for collapsing runs of similar windows into matches.

Neighbouring windows of a good match usually score well too. While scores
stay above the threshold the strongest window is held as *pending*; when a
window drops below the threshold the pending one is finalised. Finalised
matches that overlap the previously accepted one (start distance smaller
than the pattern length) replace it only if they are stronger.

All transitions are pure: they return a new ScanState and never mutate
the one given.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..models import SearchMatch


@dataclass(frozen=True)
class ScanState:
    pending: Optional[SearchMatch] = None
    accepted: Tuple[SearchMatch, ...] = ()

    @property
    def last_accepted(self) -> Optional[SearchMatch]:
        return self.accepted[-1] if self.accepted else None


def try_accept(state: ScanState, candidate: SearchMatch, pattern_length: int) -> ScanState:
    """Append ``candidate``, or let it replace an overlapping weaker match."""
    last = state.last_accepted
    if last is None:
        return replace(state, accepted=(candidate,))

    distance = candidate.start_index - last.start_index
    if distance >= pattern_length:
        return replace(state, accepted=state.accepted + (candidate,))

    if candidate.similarity > last.similarity:
        return replace(state, accepted=state.accepted[:-1] + (candidate,))
    return state


def offer_candidate(state: ScanState, similarity: float, threshold: float,
                    candidate: Optional[SearchMatch], pattern_length: int) -> ScanState:
    """
    Feed one scored window into the scan.

    ``candidate`` may be None when the window is below the threshold; the
    engine only builds a SearchMatch for windows that can become pending.
    """
    pending = state.pending
    if similarity >= threshold:
        if pending is None or similarity > pending.similarity:
            if candidate is None:
                raise ValueError("A window above the threshold needs a candidate match")
            return replace(state, pending=candidate)
        return state

    if pending is not None:
        state = try_accept(state, pending, pattern_length)
    return replace(state, pending=None)


def flush(state: ScanState, pattern_length: int) -> ScanState:
    """Finalise whatever is still pending at the end of a series."""
    if state.pending is None:
        return state
    state = try_accept(state, state.pending, pattern_length)
    return replace(state, pending=None)


def wants_candidate(state: ScanState, similarity: float, threshold: float) -> bool:
    """True if a window with this score would become the pending candidate."""
    return similarity >= threshold and (state.pending is None or similarity > state.pending.similarity)
