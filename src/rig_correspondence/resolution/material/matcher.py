# rig_correspondence/resolution/material/matcher.py
"""
matcher.py

Does: Pick the material for a remembered slot out of an object's current
      material array. Cascade:
        1) the same slot if its score is ≥ 85
        2) any slot with an exact (cleaned) name, score 100
        3) among every slot scoring ≥ 85, the smallest edit distance
           (then the highest score)
        4) otherwise nothing
      Scores: 100 exact · 90 near-length containment · int(70·ratio) lopsided
      containment · 85 colour variant (shared prefix, diverging remainders) ·
      int(80·edit similarity) otherwise.
Returns: find_best_material(), calculate_score(), clean_name(), rank_materials().
Used by: Material preset application and slot suggestion lists.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

from rig_correspondence.resolution.general.fuzzy import (
    common_prefix_len,
    levenshtein_distance,
    name_similarity,
)
from rig_correspondence.resolution.general.token import normalize_name
from rig_correspondence.resolution.general.types import Named

__all__ = [
    "MaterialSlot",
    "clean_name",
    "calculate_score",
    "find_best_material",
    "rank_materials",
]

log = logging.getLogger(__name__)

M = TypeVar("M", bound=Named)

# ── Tunables ─────────────────────────────────────────────────────────────────
EXACT_SCORE = 100
CONTAINMENT_SCORE = 90
CONTAINMENT_LENGTH_RATIO = 0.8      # strictly greater than
LOPSIDED_CONTAINMENT_MAX = 70
VARIANT_SCORE = 85
VARIANT_PREFIX_RATIO = 0.40
EDIT_SCORE_MAX = 80
ACCEPT_SCORE = 85

_SUFFIX_RE = re.compile(r"(\s?\(Instance\)|\.00\d|_Mat|_Material|\sCopy)$", re.IGNORECASE)
_SEPARATORS_RE = re.compile(r"[_\-\s]")


@dataclass(frozen=True)
class MaterialSlot:
    """What was remembered about one slot: its index and, optionally, names."""

    slot_index: int
    fuzzy_name: Optional[str] = None
    material_name: Optional[str] = None

    @property
    def target_name(self) -> Optional[str]:
        return self.fuzzy_name or self.material_name or None


def clean_name(name: Optional[str]) -> str:
    """Strip engine suffixes ((Instance), .001, _Mat, _Material, Copy), separators and case."""
    if not name:
        return ""
    cleaned = _SUFFIX_RE.sub("", name)
    return _SEPARATORS_RE.sub("", cleaned).lower()


def calculate_score(target: str, candidate: str) -> int:
    """
    Does: Score two cleaned names on the 0–100 scale described above.
    Returns: Integer score.
    """
    if target == candidate:
        return EXACT_SCORE

    if candidate in target or target in candidate:
        ratio = min(len(target), len(candidate)) / max(len(target), len(candidate))
        if ratio > CONTAINMENT_LENGTH_RATIO:
            return CONTAINMENT_SCORE
        return int(LOPSIDED_CONTAINMENT_MAX * ratio)

    # containment is ruled out above, so any shared prefix diverges (white/blue)
    shared = common_prefix_len(target, candidate)
    if shared > 0:
        prefix_ratio = shared / min(len(target), len(candidate))
        if prefix_ratio >= VARIANT_PREFIX_RATIO:
            return VARIANT_SCORE

    longest = max(len(target), len(candidate))
    if longest == 0:
        return 0
    similarity = 1.0 - levenshtein_distance(target, candidate) / longest
    return int(similarity * EDIT_SCORE_MAX)


def find_best_material(
    slot: MaterialSlot,
    candidates: Sequence[Optional[M]],
) -> Optional[M]:
    """
    Does: Run the slot cascade over `candidates` (entries may be None).
    Returns: The chosen candidate, or None when nothing scores high enough.
    """
    if not candidates:
        return None

    in_range = 0 <= slot.slot_index < len(candidates)
    target_name = slot.target_name
    if not target_name:
        # nothing to compare: fall back to the remembered index
        return candidates[slot.slot_index] if in_range else None

    target = clean_name(target_name)

    if in_range:
        same_slot = candidates[slot.slot_index]
        if same_slot is not None and calculate_score(target, clean_name(same_slot.name)) >= ACCEPT_SCORE:
            return same_slot

    scored: list[tuple[M, int, str]] = []
    for candidate in candidates:
        if candidate is None:
            continue
        cleaned = clean_name(candidate.name)
        score = calculate_score(target, cleaned)
        if score == EXACT_SCORE:
            return candidate
        scored.append((candidate, score, cleaned))

    qualified = [
        (candidate, score, levenshtein_distance(target, cleaned))
        for candidate, score, cleaned in scored
        if score >= ACCEPT_SCORE
    ]
    if not qualified:
        log.debug("No material for slot %d (%r)", slot.slot_index, target_name)
        return None

    # sorted() is stable: equal keys keep slot order
    qualified.sort(key=lambda item: (item[2], -item[1]))
    return qualified[0][0]


def rank_materials(
    name: str,
    candidates: Sequence[Optional[M]],
    limit: int = 5,
) -> list[tuple[M, float]]:
    """
    Does: Order candidates by name-only similarity to `name` for suggestion lists.
    Returns: Up to `limit` (candidate, similarity) pairs, best first; zero scores dropped.
    """
    query = normalize_name(clean_name(name))
    ranked: list[tuple[M, float]] = []
    for candidate in candidates:
        if candidate is None:
            continue
        score = name_similarity(query, normalize_name(clean_name(candidate.name)))
        if score > 0.0:
            ranked.append((candidate, score))
    ranked.sort(key=lambda item: -item[1])
    return ranked[:limit]
