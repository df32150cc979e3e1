# rig_correspondence/resolution/hierarchy/paths.py
"""
paths.

Does: Root-relative node paths. A NodePath is the tuple of names from the
      (exclusive) root to the (inclusive) node; () is the root itself and
      None means "not under this root".
Returns: path_of(), resolve_path(), depth(), format_path(), parse_path().
Used by: Every bone strategy, the materializer and decision replay.
"""

from __future__ import annotations

from typing import Optional

from rig_correspondence.resolution.hierarchy.node import TreeNode

__all__ = [
    "NodePath",
    "PATH_SEPARATOR",
    "path_of",
    "resolve_path",
    "depth",
    "format_path",
    "parse_path",
]

NodePath = tuple[str, ...]
PATH_SEPARATOR = "/"


def path_of(root: TreeNode, node: TreeNode) -> Optional[NodePath]:
    """Walk parents from `node` up to `root`; None if `root` is never reached."""
    names: list[str] = []
    current: TreeNode | None = node
    while current is not None and current is not root:
        names.append(current.name)
        current = current.parent
    if current is not root:
        return None
    return tuple(reversed(names))


def resolve_path(root: TreeNode, path: NodePath) -> Optional[TreeNode]:
    """Follow exact child names from `root`; None at the first missing segment."""
    current = root
    for part in path:
        child = current.find_child(part)
        if child is None:
            return None
        current = child
    return current


def depth(root: TreeNode, node: TreeNode) -> int:
    """Number of path segments from `root` to `node`; -1 if `node` is not under `root`."""
    path = path_of(root, node)
    return -1 if path is None else len(path)


def format_path(path: Optional[NodePath]) -> str:
    if path is None:
        return "<not found>"
    return PATH_SEPARATOR.join(path)


def parse_path(text: str) -> NodePath:
    return tuple(part for part in text.split(PATH_SEPARATOR) if part)
