# rig_correspondence/resolution/bone/manager.py
"""
manager.py

Does: Run the bone strategies in priority order. Manual mappings win outright;
      the first high-confidence result returns immediately; otherwise the most
      confident result found by any strategy is returned.
Returns: BoneMappingManager with find_best_match() and manual-mapping helpers.
Used by: bone.materializer.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from rig_correspondence.resolution.bone.models import MatchResult
from rig_correspondence.resolution.bone.strategies import (
    BoneMappingStrategy,
    ExactNameStrategy,
    ExactPathStrategy,
    FuzzyNameStrategy,
)
from rig_correspondence.resolution.hierarchy import TreeNode

__all__ = ["BoneMappingManager", "default_strategies", "MANUAL_STRATEGY"]

log = logging.getLogger(__name__)

MANUAL_STRATEGY = "manual"


def default_strategies() -> list[BoneMappingStrategy]:
    return [ExactPathStrategy(), ExactNameStrategy(), FuzzyNameStrategy()]


class BoneMappingManager:
    def __init__(self, strategies: Optional[Iterable[BoneMappingStrategy]] = None):
        chosen = list(strategies) if strategies is not None else default_strategies()
        if not chosen:
            raise ValueError("At least one strategy must be provided")
        self._strategies = sorted(chosen, key=lambda s: s.priority)
        self._manual: dict[TreeNode, TreeNode] = {}

    @property
    def strategies(self) -> tuple[BoneMappingStrategy, ...]:
        return tuple(self._strategies)

    # ── manual mappings ──────────────────────────────────────────────────────
    def add_manual_mapping(self, source: TreeNode, target: TreeNode) -> None:
        """Pin `source` to `target`; consulted before every strategy."""
        self._manual[source] = target

    def clear_manual_mappings(self) -> None:
        self._manual.clear()

    # ── chain ────────────────────────────────────────────────────────────────
    def find_best_match(
        self,
        source: TreeNode,
        source_root: TreeNode,
        target_root: TreeNode,
        exclude: Optional[AbstractSet[TreeNode]] = None,
    ) -> Optional[MatchResult]:
        manual = self._manual.get(source)
        if manual is not None:
            return MatchResult(target=manual, confidence=1.0, strategy=MANUAL_STRATEGY)

        best: Optional[MatchResult] = None
        for strategy in self._strategies:
            result = strategy.find_target(source, source_root, target_root, exclude)
            if result is None:
                continue
            if result.is_high_confidence:
                log.debug(
                    "[chain] %r -> %r via %s (%.2f)",
                    source, result.target, result.strategy, result.confidence,
                )
                return result
            if best is None or result.confidence > best.confidence:
                best = result

        if best is not None:
            log.debug(
                "[chain] %r best-effort -> %r via %s (%.2f, %d candidates)",
                source, best.target, best.strategy, best.confidence, len(best.candidates),
            )
        return best
