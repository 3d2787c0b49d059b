# src/weeklyctl/engine/suggest.py

"""
"Did you mean" support: nearest word lookup over a fixed vocabulary.
"""

from collections.abc import Callable, Iterable
from typing import Optional

Distance = Callable[[str, str], int]


# ---------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------

def hamming_distance(a: str, b: str) -> int:
    """
    Positional mismatches over the common prefix length, plus the
    difference in length.
    """
    mismatches = sum(1 for x, y in zip(a, b) if x != y)
    return mismatches + abs(len(a) - len(b))


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance with unit cost for insert, delete and substitute.
    """
    n, m = len(a), len(b)
    d = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(n + 1):
        d[i][0] = i
    for j in range(m + 1):
        d[0][j] = j

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            if a[i - 1] == b[j - 1]:
                d[i][j] = d[i - 1][j - 1]
            else:
                d[i][j] = 1 + min(d[i - 1][j], d[i][j - 1], d[i - 1][j - 1])

    return d[n][m]


# ---------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------

class NearestWordFinder:
    """
    Holds an ordered vocabulary and finds the closest entry to a word.

    Ties go to the word listed first.
    """

    def __init__(self, words: Iterable[str], distance: Distance = levenshtein_distance) -> None:
        self.words: tuple[str, ...] = tuple(words)
        self.distance = distance

    def find_nearest(self, word: str) -> Optional[str]:
        nearest: Optional[str] = None
        best = 0

        for w in self.words:
            dist = self.distance(word, w)
            if nearest is None or dist < best:
                nearest = w
                best = dist

        return nearest
