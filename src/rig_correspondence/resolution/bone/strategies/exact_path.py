# rig_correspondence/resolution/bone/strategies/exact_path.py
"""
exact_path.py

Does: Priority-1 strategy: the source's root-relative path resolved verbatim
      under the target root. The root maps onto the root.
Returns: MatchResult with confidence 1.0, or None.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Optional

from rig_correspondence.resolution.bone.models import MatchResult
from rig_correspondence.resolution.hierarchy import TreeNode, format_path, path_of, resolve_path

__all__ = ["ExactPathStrategy"]

log = logging.getLogger(__name__)


class ExactPathStrategy:
    name = "exact_path"
    priority = 1

    def find_target(
        self,
        source: TreeNode,
        source_root: TreeNode,
        target_root: TreeNode,
        exclude: Optional[AbstractSet[TreeNode]] = None,
    ) -> Optional[MatchResult]:
        path = path_of(source_root, source)
        if path is None:
            log.debug("[%s] %r is not under %r", self.name, source, source_root)
            return None

        if not path:
            return MatchResult(target=target_root, confidence=1.0, strategy=self.name)

        target = resolve_path(target_root, path)
        if target is None:
            return None

        log.debug("[%s] %s resolved under %r", self.name, format_path(path), target_root)
        return MatchResult(target=target, confidence=1.0, strategy=self.name)
