# rig_correspondence/resolution/bone/strategies/base.py
"""
base.py.

Does: Define the strategy contract: given a source node, its root, a target
      root and an exclusion set, return zero or one MatchResult.
Used by: bone.manager (ordering by priority) and every concrete strategy.
"""

from __future__ import annotations

from typing import AbstractSet, Iterator, Optional, Protocol, runtime_checkable

from rig_correspondence.resolution.bone.models import MatchResult
from rig_correspondence.resolution.hierarchy import TreeNode

__all__ = ["BoneMappingStrategy", "iter_target_candidates"]


@runtime_checkable
class BoneMappingStrategy(Protocol):
    """
    Structural contract for bone-matching strategies.

    - name: label reported in MatchResult.strategy and logs
    - priority: lower runs first
    - find_target(): None means "no match" and is never an error
    """

    name: str
    priority: int

    def find_target(
        self,
        source: TreeNode,
        source_root: TreeNode,
        target_root: TreeNode,
        exclude: Optional[AbstractSet[TreeNode]] = None,
    ) -> Optional[MatchResult]: ...


def iter_target_candidates(
    target_root: TreeNode,
    exclude: Optional[AbstractSet[TreeNode]] = None,
) -> Iterator[TreeNode]:
    """Every descendant of `target_root` (pre-order), minus the root and excluded nodes."""
    for node in target_root.iter_descendants():
        if exclude and node in exclude:
            continue
        yield node
