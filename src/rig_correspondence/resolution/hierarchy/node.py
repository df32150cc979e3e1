# rig_correspondence/resolution/hierarchy/node.py
"""
node.

Does: In-memory tree model for rigs: TreeNode (name, parent, ordered children,
      local transform) and LocalTransform (opaque position/rotation/scale).
Returns: TreeNode with add_child/find_child/iter_descendants helpers and a
         from_paths() builder.
Used by: Path utilities, strategies, the materializer and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

__all__ = [
    "LocalTransform",
    "TreeNode",
]

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]


@dataclass(frozen=True)
class LocalTransform:
    """Position/rotation/scale relative to the parent. Copied verbatim, never interpreted."""

    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = (0.0, 0.0, 0.0, 1.0)
    scale: Vector3 = (1.0, 1.0, 1.0)


class TreeNode:
    """
    A position in a hierarchy. Nodes compare and hash by identity: two nodes
    with the same name under different parents are different nodes.
    """

    __slots__ = ("name", "transform", "_parent", "_children")

    def __init__(
        self,
        name: str,
        parent: TreeNode | None = None,
        transform: LocalTransform | None = None,
    ):
        self.name = name
        self.transform = transform or LocalTransform()
        self._parent: TreeNode | None = None
        self._children: list[TreeNode] = []
        if parent is not None:
            parent._attach(self)

    def __repr__(self) -> str:
        return f"TreeNode({self.name!r})"

    # ── structure ────────────────────────────────────────────────────────────
    @property
    def parent(self) -> TreeNode | None:
        return self._parent

    @property
    def children(self) -> tuple[TreeNode, ...]:
        return tuple(self._children)

    def _attach(self, child: TreeNode) -> None:
        node: TreeNode | None = self
        while node is not None:
            if node is child:
                raise ValueError(f"attaching {child!r} under {self!r} would create a cycle")
            node = node._parent
        if child._parent is not None:
            child._parent._children.remove(child)
        child._parent = self
        self._children.append(child)

    def add_child(self, name: str, transform: LocalTransform | None = None) -> TreeNode:
        """Create a new child appended after the existing ones."""
        return TreeNode(name, parent=self, transform=transform)

    def find_child(self, name: str) -> TreeNode | None:
        """First direct child whose name is exactly `name`."""
        for child in self._children:
            if child.name == name:
                return child
        return None

    def iter_descendants(self, include_self: bool = False) -> Iterator[TreeNode]:
        """Depth-first, pre-order, children in order."""
        if include_self:
            yield self
        stack = list(reversed(self._children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    # ── builders ─────────────────────────────────────────────────────────────
    @classmethod
    def from_paths(cls, root_name: str, paths: Iterable[str]) -> TreeNode:
        """
        Build a tree from slash-delimited paths relative to the root
        ("Hips/Spine/Chest"). Intermediate nodes are created once and reused.
        """
        root = cls(root_name)
        for path in paths:
            node = root
            for part in path.split("/"):
                if not part:
                    continue
                child = node.find_child(part)
                node = child if child is not None else node.add_child(part)
        return root
