"""
ordinal_rules.py
================

Pairwise rank relations ("ordinal rules") between the points of an
approximated pattern, and weighted counting of the rules another pattern
breaks.

A rule ``(i, j, rel)`` records whether ``values[j]`` is above (+1), below
(-1) or equal to (0) ``values[i]``. The full set for k points is a
Kendall-tau style encoding of the pattern's shape.
"""

from typing import Iterator, List, NamedTuple, Sequence, Union

import numpy as np

from ..errors import InvariantViolation


class OrdinalRule(NamedTuple):
    i: int
    j: int
    relation: int


class OrdinalRuleSet:
    """All k*(k-1)/2 rules of one approximation, held as parallel arrays."""

    def __init__(self, i: np.ndarray, j: np.ndarray, relation: np.ndarray):
        self.i = i
        self.j = j
        self.relation = relation

    @classmethod
    def from_values(cls, values: Sequence[float]) -> 'OrdinalRuleSet':
        arr = np.asarray(values, dtype=float)
        # triu_indices walks row by row, giving the same (i, j) order as two nested loops.
        i, j = np.triu_indices(len(arr), k=1)
        relation = np.sign(arr[j] - arr[i]).astype(np.int8)
        return cls(i, j, relation)

    @classmethod
    def from_rules(cls, rules: Sequence[OrdinalRule]) -> 'OrdinalRuleSet':
        if not rules:
            empty = np.empty(0, dtype=np.int64)
            return cls(empty, empty, empty.astype(np.int8))
        arr = np.asarray(rules, dtype=np.int64)
        return cls(arr[:, 0], arr[:, 1], arr[:, 2].astype(np.int8))

    def __len__(self) -> int:
        return len(self.relation)

    def __iter__(self) -> Iterator[OrdinalRule]:
        for i, j, rel in zip(self.i, self.j, self.relation):
            yield OrdinalRule(int(i), int(j), int(rel))

    def count_broken(self, values_target: Sequence[float]) -> float:
        """Weighted number of rules ``values_target`` disagrees with.

        A broken rule anchored at position j costs ``(total - j + 1) / total``.
        """
        total = len(self)
        if total == 0:
            raise InvariantViolation("Cannot score against an empty rule set")

        target = np.asarray(values_target, dtype=float)
        observed = np.sign(target[self.j] - target[self.i]).astype(np.int8)
        broken = observed != self.relation
        weights = (total - self.j[broken] + 1) / total
        return float(weights.sum())


def generate_pairwise_rules(values: Sequence[float]) -> List[OrdinalRule]:
    """Return (i, j, rel) for every i < j, rel in {1, 0, -1}."""
    return list(OrdinalRuleSet.from_values(values))


def count_broken_rules_against(values_target: Sequence[float],
                               rules: Union[OrdinalRuleSet, Sequence[OrdinalRule]]) -> float:
    """
    Weighted count of ``rules`` broken by ``values_target``.

    ``values_target`` must have the same length as the values the rules
    were generated from; rule indices refer to positions in it.
    """
    if not isinstance(rules, OrdinalRuleSet):
        rules = OrdinalRuleSet.from_rules(list(rules))
    return rules.count_broken(values_target)
