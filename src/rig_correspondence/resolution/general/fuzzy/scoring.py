# src/rig_correspondence/resolution/general/fuzzy/scoring.py
from __future__ import annotations

"""
scoring.py

Does: Similarity scores for node names and node paths:
      - prefix_similarity: subject-prefix likeness with pure-name, number,
        side and full-run bonuses (synonym groups short-circuit)
      - path_similarity: depth agreement blended with leaf-weighted segment matches
      - name_similarity: name-only blend of LCS, synonym, containment, edit, initial
Returns: Floats in [0,1].
Used by: The fuzzy bone strategy and material suggestions.
"""

from typing import Sequence

from rig_correspondence.resolution.general.fuzzy.similarity import (
    common_prefix_len,
    edit_similarity,
    longest_common_substring,
)
from rig_correspondence.resolution.general.fuzzy.variants import (
    common_variant_score,
    variant_group_similarity,
)
from rig_correspondence.resolution.general.token.normalize import (
    extract_numbers,
    normalize_name,
    pure_name,
)
from rig_correspondence.resolution.general.token.side import (
    detect_side,
    sides_conflict,
)

__all__ = [
    "prefix_similarity",
    "path_similarity",
    "name_similarity",
]

__docformat__ = "google"

# ── Tunables ─────────────────────────────────────────────────────────────────
VARIANT_SHORTCUT = 0.7        # synonym-group score above this is returned as-is
MIN_LEADING_RUN = 2           # leading chars that must agree on pure names
PURE_NAME_BONUS = 0.3
NUMBER_BONUS = 0.2            # scaled by shared/total numbers
SIDE_BONUS = 0.05
FULL_RUN_BONUS = 0.05

SEGMENT_MIN_LCS = 3           # partial segment credit needs ≥3 shared chars
SEGMENT_PARTIAL_SCALE = 0.5
SEGMENT_SIDE_PENALTY = 0.3    # multiplier when segments carry opposite sides
DEPTH_WEIGHT = 0.5

NAME_WEIGHTS = {
    "lcs": 0.60,
    "variant": 0.20,
    "substring": 0.10,
    "edit": 0.08,
    "initial": 0.02,
}


# ─────────────────────────────────────────────────────────────────────────────
# 1) Prefix similarity
# ─────────────────────────────────────────────────────────────────────────────

def _number_bonus(source_prefix: str, target_prefix: str) -> float:
    source_numbers = extract_numbers(source_prefix)
    target_numbers = extract_numbers(target_prefix)
    if not source_numbers or not target_numbers:
        return 0.0
    shared = len(set(source_numbers) & set(target_numbers))
    if not shared:
        return 0.0
    return shared / max(len(source_numbers), len(target_numbers)) * NUMBER_BONUS


def prefix_similarity(source_prefix: str, target_prefix: str) -> float:
    """
    Does: Compare two subject prefixes.
          equal → 1.0; same synonym group → 0.85; otherwise the leading run of
          the pure names over the longer pure name plus bonuses (pure names equal
          +0.3, shared numbers +0.2·ratio, same side +0.05, run covers the shorter
          pure name +0.05). A run shorter than 2 scores 0.
    Returns: Float in [0,1].
    """
    if not source_prefix or not target_prefix:
        return 0.0
    if source_prefix == target_prefix:
        return 1.0

    variant = variant_group_similarity(source_prefix, target_prefix)
    if variant > VARIANT_SHORTCUT:
        return variant

    source_pure = pure_name(source_prefix)
    target_pure = pure_name(target_prefix)

    run = common_prefix_len(source_pure, target_pure)
    if run < MIN_LEADING_RUN:
        return 0.0

    base = run / max(len(source_pure), len(target_pure))
    pure_bonus = PURE_NAME_BONUS if source_pure == target_pure else 0.0

    source_side = detect_side(source_prefix, normalized=True)
    target_side = detect_side(target_prefix, normalized=True)
    side_bonus = SIDE_BONUS if source_side and source_side == target_side else 0.0

    full_run_bonus = FULL_RUN_BONUS if run == min(len(source_pure), len(target_pure)) else 0.0

    score = base + pure_bonus + _number_bonus(source_prefix, target_prefix) + side_bonus + full_run_bonus
    return min(1.0, score)


# ─────────────────────────────────────────────────────────────────────────────
# 2) Path similarity
# ─────────────────────────────────────────────────────────────────────────────

def _segment_weight(i: int, n: int) -> float:
    # the leaf-most aligned segment weighs 1.5, the first one just above 1.0
    return 1.0 + 0.5 * (i + 1) / n


def path_similarity(source_path: Sequence[str], target_path: Sequence[str]) -> float:
    """
    Does: 0.5 · depth score (1 - |Δdepth| / max depth) + 0.5 · weighted segment score.
          Each aligned segment pair scores its full weight when normalized names are
          equal, else LCS/maxLen · weight · 0.5 when LCS ≥ 3 (×0.3 on opposite sides).
    Returns: Float in [0,1]; 0.0 if either path is empty.
    """
    if not source_path or not target_path:
        return 0.0

    n_source = len(source_path)
    n_target = len(target_path)
    max_depth = max(n_source, n_target)
    depth_score = 1.0 - abs(n_source - n_target) / max_depth

    n = min(n_source, n_target)
    matched = 0.0
    possible = 0.0
    for i in range(n):
        weight = _segment_weight(i, n)
        possible += weight

        raw_source, raw_target = source_path[i], target_path[i]
        seg_source = normalize_name(raw_source)
        seg_target = normalize_name(raw_target)
        if seg_source == seg_target:
            matched += weight
            continue

        lcs = longest_common_substring(seg_source, seg_target)
        longest = max(len(seg_source), len(seg_target))
        if lcs >= SEGMENT_MIN_LCS and longest > 0:
            partial = lcs / longest * weight * SEGMENT_PARTIAL_SCALE
            if sides_conflict(raw_source, raw_target):
                partial *= SEGMENT_SIDE_PENALTY
            matched += partial

    node_score = matched / possible if possible > 0 else 0.0
    return depth_score * DEPTH_WEIGHT + node_score * (1.0 - DEPTH_WEIGHT)


# ─────────────────────────────────────────────────────────────────────────────
# 3) Name-only similarity
# ─────────────────────────────────────────────────────────────────────────────

def name_similarity(a: str, b: str) -> float:
    """
    Does: Name-only likeness of two (already normalized) names:
          60% LCS ratio, 20% synonym group, 10% containment (≥3 chars),
          8% normalized edit similarity, 2% same first character.
    Returns: Float in [0,1].
    """
    if not a or not b:
        return 0.0

    longest = max(len(a), len(b))
    lcs_score = longest_common_substring(a, b) / longest
    variant_score = common_variant_score(a, b)
    substring_score = 1.0 if min(len(a), len(b)) >= 3 and (a in b or b in a) else 0.0
    initial_score = 1.0 if a[0] == b[0] else 0.0

    return (
        lcs_score * NAME_WEIGHTS["lcs"]
        + variant_score * NAME_WEIGHTS["variant"]
        + substring_score * NAME_WEIGHTS["substring"]
        + edit_similarity(a, b) * NAME_WEIGHTS["edit"]
        + initial_score * NAME_WEIGHTS["initial"]
    )
