# src/rig_correspondence/resolution/general/fuzzy/similarity.py
from __future__ import annotations

"""
similarity.py

Does: String-similarity primitives shared by the bone and material matchers:
      longest common substring, Levenshtein distance / normalized similarity,
      and the leading consecutive-character run.
Returns: Integer lengths/distances and a float similarity in [0,1].
Used by: fuzzy.scoring, the fuzzy bone strategy and material.matcher.
"""

from rapidfuzz.distance import Levenshtein

__all__ = [
    "longest_common_substring",
    "levenshtein_distance",
    "edit_similarity",
    "common_prefix_len",
]

__docformat__ = "google"


def longest_common_substring(a: str, b: str) -> int:
    """
    Does: Length of the longest run of characters appearing contiguously in both strings.
    Returns: Integer ≥ 0 (0 if either string is empty).
    """
    if not a or not b:
        return 0

    best = 0
    prev = [0] * (len(b) + 1)
    for ca in a:
        cur = [0] * (len(b) + 1)
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                cur[j] = prev[j - 1] + 1
                if cur[j] > best:
                    best = cur[j]
        prev = cur
    return best


def levenshtein_distance(a: str, b: str) -> int:
    """Does: Unit-cost edit distance (insert/delete/substitute)."""
    return Levenshtein.distance(a or "", b or "")


def edit_similarity(a: str, b: str) -> float:
    """
    Does: 1 - distance / max(len(a), len(b)).
    Returns: Float in [0,1]; 0.0 when both strings are empty.
    """
    if not a and not b:
        return 0.0
    return float(Levenshtein.normalized_similarity(a or "", b or ""))


def common_prefix_len(a: str, b: str) -> int:
    """Does: Number of leading characters shared by `a` and `b`."""
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i
