# src/rig_correspondence/resolution/general/fuzzy/__init__.py
"""
fuzzy.

Does: Facade exposing the similarity primitives, synonym-group lookups and
the prefix/path/name scorers.

Returns: Public API for string similarity used by bone and material matching.
Used by: bone.strategies.fuzzy_name and material.matcher.
"""

from __future__ import annotations

# ── Primitives ───────────────────────────────────────────────────────────────
from .similarity import (
    common_prefix_len,
    edit_similarity,
    levenshtein_distance,
    longest_common_substring,
)

# ── Synonym groups ───────────────────────────────────────────────────────────
from .variants import (
    common_variant_score,
    get_common_variants,
    variant_group_similarity,
)

# ── Scoring ──────────────────────────────────────────────────────────────────
from .scoring import (
    name_similarity,
    path_similarity,
    prefix_similarity,
)

__all__ = [
    # Primitives
    "longest_common_substring",
    "levenshtein_distance",
    "edit_similarity",
    "common_prefix_len",
    # Synonym groups
    "get_common_variants",
    "variant_group_similarity",
    "common_variant_score",
    # Scoring
    "prefix_similarity",
    "path_similarity",
    "name_similarity",
]

__docformat__ = "google"
