# rig_correspondence/resolution/bone/strategies/exact_name.py
"""
exact_name.py

Does: Priority-2 strategy: nodes under the target root carrying exactly the
      source's name at exactly the source's depth. Depth is a hard filter so
      repeated leaf names ("End", "IK") at other depths never match.
Returns: one match → 0.85, no candidates; several → 0.6 with all of them; else None.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Optional

from rig_correspondence.resolution.bone.models import MatchResult
from rig_correspondence.resolution.bone.strategies.base import iter_target_candidates
from rig_correspondence.resolution.hierarchy import TreeNode, depth

__all__ = ["ExactNameStrategy"]

log = logging.getLogger(__name__)

UNIQUE_CONFIDENCE = 0.85
SHARED_CONFIDENCE = 0.6


class ExactNameStrategy:
    name = "exact_name"
    priority = 2

    def find_target(
        self,
        source: TreeNode,
        source_root: TreeNode,
        target_root: TreeNode,
        exclude: Optional[AbstractSet[TreeNode]] = None,
    ) -> Optional[MatchResult]:
        source_depth = depth(source_root, source)
        if source_depth < 0:
            return None

        matches = [
            node
            for node in iter_target_candidates(target_root, exclude)
            if node.name == source.name and depth(target_root, node) == source_depth
        ]

        if not matches:
            return None

        if len(matches) == 1:
            return MatchResult(target=matches[0], confidence=UNIQUE_CONFIDENCE, strategy=self.name)

        log.debug(
            "[%s] %d nodes named %r at depth %d", self.name, len(matches), source.name, source_depth
        )
        return MatchResult(
            target=matches[0],
            confidence=SHARED_CONFIDENCE,
            strategy=self.name,
            candidates=tuple(matches),
        )
