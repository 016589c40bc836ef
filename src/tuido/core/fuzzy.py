"""Fuzzy matching of search queries against todo text.

Three strategies are tried in order of strength:

- exact: the query is a case-sensitive substring of the candidate
- subsequence: all query characters occur in order in the case-folded
  candidate; fewer gaps between matched characters rank higher
- distance: Levenshtein distance between the case-folded strings

Results compare by ``(kind, penalty)`` so a plain ``min`` picks the best one.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein


class MatchKind(enum.IntEnum):
    """Match strategies, strongest first."""

    EXACT = 0
    SUBSEQUENCE = 1
    DISTANCE = 2


@dataclass(frozen=True, order=True)
class MatchResult:
    kind: MatchKind
    penalty: int = 0

    @classmethod
    def exact(cls) -> MatchResult:
        return cls(MatchKind.EXACT)

    @classmethod
    def subsequence(cls, gaps: int) -> MatchResult:
        return cls(MatchKind.SUBSEQUENCE, gaps)

    @classmethod
    def distance(cls, d: int) -> MatchResult:
        return cls(MatchKind.DISTANCE, d)

    @property
    def is_exact(self) -> bool:
        return self.kind == MatchKind.EXACT

    @property
    def is_subsequence(self) -> bool:
        return self.kind == MatchKind.SUBSEQUENCE

    @property
    def is_distance(self) -> bool:
        return self.kind == MatchKind.DISTANCE


def subsequence_gaps(query: str, candidate: str) -> int | None:
    """Fewest gaps over all in-order placements of ``query`` in ``candidate``.

    A gap is a pair of consecutive query characters that are not adjacent in
    the candidate. Returns None when ``query`` is not a subsequence.
    """
    if not query:
        return 0
    n = len(candidate)
    # best[i]: fewest gaps with the current query char matched at position i
    best: list[int | None] = [0 if ch == query[0] else None for ch in candidate]
    for qc in query[1:]:
        nxt: list[int | None] = [None] * n
        running: int | None = None  # min of best[k] for k < i - 1
        for i in range(1, n):
            if i >= 2 and best[i - 2] is not None:
                running = best[i - 2] if running is None else min(running, best[i - 2])
            if candidate[i] != qc:
                continue
            options = []
            if best[i - 1] is not None:
                options.append(best[i - 1])
            if running is not None:
                options.append(running + 1)
            if options:
                nxt[i] = min(options)
        best = nxt
    found = [gaps for gaps in best if gaps is not None]
    return min(found) if found else None


def default_max_distance(query: str) -> int:
    """Largest edit distance still accepted as a match for ``query``."""
    return 1 if len(query) <= 3 else 2


class FuzzyMatcher:
    """Scores queries against candidates and picks the best item."""

    def __init__(self, max_distance: int | None = None) -> None:
        """Initialize the matcher.

        Args:
            max_distance: Fixed acceptance threshold for distance matches.
                None uses :func:`default_max_distance`.
        """
        self._max_distance = max_distance

    def max_distance(self, query: str) -> int:
        if self._max_distance is not None:
            return self._max_distance
        return default_max_distance(query)

    def score(self, query: str, candidate: str) -> MatchResult:
        if query in candidate:
            return MatchResult.exact()
        folded_query = query.casefold()
        folded_candidate = candidate.casefold()
        gaps = subsequence_gaps(folded_query, folded_candidate)
        if gaps is not None:
            return MatchResult.subsequence(gaps)
        return MatchResult.distance(Levenshtein.distance(folded_query, folded_candidate))

    def accepts(self, query: str, result: MatchResult) -> bool:
        return not result.is_distance or result.penalty <= self.max_distance(query)

    def search(self, query: str, texts: Iterable[str]) -> int | None:
        """Index of the best-ranked text, or None.

        None is returned for an empty query, an empty sequence, or when no
        candidate scores better than the distance threshold. Ties go to the
        lowest index.
        """
        if not query:
            return None
        best: tuple[MatchResult, int] | None = None
        for index, text in enumerate(texts):
            result = self.score(query, text)
            if not self.accepts(query, result):
                continue
            if best is None or (result, index) < best:
                best = (result, index)
        return best[1] if best is not None else None
