"""
hierarchy
=========

Tree model and root-relative path utilities:
- node  : TreeNode, LocalTransform
- paths : path_of / resolve_path / depth and path formatting
"""

from .node import (
    LocalTransform,
    TreeNode,
)
from .paths import (
    NodePath,
    depth,
    format_path,
    parse_path,
    path_of,
    resolve_path,
)

__all__ = [
    # node
    "LocalTransform",
    "TreeNode",
    # paths
    "NodePath",
    "path_of",
    "resolve_path",
    "depth",
    "format_path",
    "parse_path",
]

__docformat__ = "google"
