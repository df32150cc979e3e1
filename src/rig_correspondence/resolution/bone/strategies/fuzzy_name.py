# rig_correspondence/resolution/bone/strategies/fuzzy_name.py
"""
fuzzy_name.py

Does: Priority-3 strategy for rigs whose structure and names diverge
      (renamed or retargeted by other tools). Every target node is gated on
      subject-prefix similarity, equal depth and side agreement, then scored:
          final = prefix_similarity · 0.8 + path_similarity · 0.2
      Survivors above 0.65 are ranked by score, then by the longest common
      substring of the full normalized names, then by path similarity.
Returns: MatchResult with the top-5 candidates (best first), or None.
Used by: bone.manager as the last strategy in the chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Optional

from rig_correspondence.resolution.bone.models import MatchResult
from rig_correspondence.resolution.bone.strategies.base import iter_target_candidates
from rig_correspondence.resolution.general.fuzzy import (
    longest_common_substring,
    name_similarity,
    path_similarity,
    prefix_similarity,
)
from rig_correspondence.resolution.general.token import (
    normalize_name,
    sides_conflict,
    subject_prefix,
)
from rig_correspondence.resolution.general.utils import debug
from rig_correspondence.resolution.hierarchy import TreeNode, format_path, path_of

__all__ = ["FuzzyCandidate", "FuzzyNameStrategy", "score_candidates"]

log = logging.getLogger(__name__)

# ── Tunables ─────────────────────────────────────────────────────────────────
PREFIX_GATE = 0.5
PREFIX_WEIGHT = 0.8
PATH_WEIGHT = 0.2
FINAL_SCORE_CUTOFF = 0.65   # strictly greater than
MAX_CANDIDATES = 5

TRACE_TOPIC = "fuzzy"


@dataclass(frozen=True)
class FuzzyCandidate:
    node: TreeNode
    score: float
    lcs_length: int
    path_score: float
    prefix_score: float
    name_score: float


def score_candidates(
    source: TreeNode,
    source_root: TreeNode,
    target_root: TreeNode,
    exclude: Optional[AbstractSet[TreeNode]] = None,
) -> list[FuzzyCandidate]:
    """
    Does: Gate and score every target node against `source`.
    Returns: All surviving candidates, ranked best first (not truncated).
    """
    source_path = path_of(source_root, source)
    if not source_path:
        # not under the root, or the root itself: nothing to compare by name
        return []

    source_norm = normalize_name(source.name)
    source_prefix = subject_prefix(source_norm)
    source_depth = len(source_path)

    survivors: list[FuzzyCandidate] = []
    for node in iter_target_candidates(target_root, exclude):
        target_norm = normalize_name(node.name)
        target_prefix = subject_prefix(target_norm)

        prefix_score = prefix_similarity(source_prefix, target_prefix)
        if prefix_score < PREFIX_GATE:
            continue

        target_path = path_of(target_root, node)
        if target_path is None or len(target_path) != source_depth:
            continue

        if sides_conflict(source.name, node.name):
            continue

        path_score = path_similarity(source_path, target_path)
        score = min(1.0, prefix_score * PREFIX_WEIGHT + path_score * PATH_WEIGHT)
        if score <= FINAL_SCORE_CUTOFF:
            continue

        candidate = FuzzyCandidate(
            node=node,
            score=score,
            lcs_length=longest_common_substring(source_norm, target_norm),
            path_score=path_score,
            prefix_score=prefix_score,
            name_score=name_similarity(source_norm, target_norm),
        )
        survivors.append(candidate)
        debug(
            f"candidate {source.name} -> {node.name} | prefix {prefix_score:.2f} | "
            f"depth {source_depth} | path {path_score:.2f} | name {candidate.name_score:.2f} | "
            f"total {score:.2f}",
            topic=TRACE_TOPIC,
        )

    # sorted() is stable: full ties keep traversal order
    survivors.sort(key=lambda c: (-c.score, -c.lcs_length, -c.path_score))
    return survivors


class FuzzyNameStrategy:
    name = "fuzzy_name"
    priority = 3

    def __init__(self, max_candidates: int = MAX_CANDIDATES):
        self.max_candidates = max_candidates

    def find_target(
        self,
        source: TreeNode,
        source_root: TreeNode,
        target_root: TreeNode,
        exclude: Optional[AbstractSet[TreeNode]] = None,
    ) -> Optional[MatchResult]:
        ranked = score_candidates(source, source_root, target_root, exclude)
        if not ranked:
            log.debug(
                "[%s] no candidate for %r (prefix %r, path %s)",
                self.name,
                source.name,
                subject_prefix(normalize_name(source.name)),
                format_path(path_of(source_root, source)),
            )
            return None

        best = ranked[0]
        return MatchResult(
            target=best.node,
            confidence=best.score,
            strategy=self.name,
            candidates=tuple(c.node for c in ranked[: self.max_candidates]),
        )
