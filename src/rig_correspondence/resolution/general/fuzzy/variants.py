# src/rig_correspondence/resolution/general/fuzzy/variants.py

"""
variants.py.

Does: Anatomical synonym groups ("hand" ~ "wrist" ~ "palm", "chest" ~ "breast")
      loaded from data/common_variants.json, plus the two group lookups used by
      the scorers: a strict group match on pure prefixes and a loose
      containment score on full normalized names.

Returns: get_common_variants(), variant_group_similarity(), common_variant_score().
Used by: fuzzy.scoring (prefix similarity and name similarity).
"""

from __future__ import annotations

import logging
from functools import lru_cache

from rig_correspondence.resolution.general.token.normalize import pure_name
from rig_correspondence.resolution.general.utils import load_config

__all__ = [
    "get_common_variants",
    "variant_group_similarity",
    "common_variant_score",
]

__docformat__ = "google"

# ── Logging ──────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)

# ── Tunables ─────────────────────────────────────────────────────────────────
VARIANT_GROUP_SCORE = 0.85
MIN_CONTAINMENT_LEN = 3  # shorter variants only count on exact equality


@lru_cache(maxsize=1)
def get_common_variants() -> dict[str, tuple[str, ...]]:
    """Does: Load validated synonym groups from config (cached for the process)."""
    groups = load_config("common_variants", mode="groups")
    log.debug("Loaded %d synonym groups", len(groups))
    return groups


def _in_group(pure: str, variants: tuple[str, ...]) -> bool:
    for variant in variants:
        if pure == variant:
            return True
        if len(variant) >= MIN_CONTAINMENT_LEN and variant in pure:
            return True
        if len(pure) >= MIN_CONTAINMENT_LEN and pure in variant:
            return True
    return False


def variant_group_similarity(source_prefix: str, target_prefix: str) -> float:
    """
    Does: Reduce both subject prefixes to pure names and check whether they fall
          into the same synonym group (equal, or one containing the other with ≥3 chars).
    Returns: 0.85 on a shared group, else 0.0.
    """
    if not source_prefix or not target_prefix:
        return 0.0

    source_pure = pure_name(source_prefix)
    target_pure = pure_name(target_prefix)

    for variants in get_common_variants().values():
        if _in_group(source_pure, variants) and _in_group(target_pure, variants):
            return VARIANT_GROUP_SCORE
    return 0.0


def common_variant_score(a: str, b: str) -> float:
    """
    Does: 1.0 if both normalized names mention a variant of the same group
          (equality, or containment for variants of ≥3 chars), else 0.0.
    """
    if not a or not b:
        return 0.0

    def _mentions(text: str, variants: tuple[str, ...]) -> bool:
        return any(
            text == v or (len(v) >= MIN_CONTAINMENT_LEN and v in text) for v in variants
        )

    for variants in get_common_variants().values():
        if _mentions(a, variants) and _mentions(b, variants):
            return 1.0
    return 0.0
