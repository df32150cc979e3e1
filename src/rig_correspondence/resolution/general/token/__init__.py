# rig_correspondence/resolution/general/token/__init__.py
"""
token.
=====

Does: Provide node-name utilities: normalization, numeric-index padding,
      subject-prefix extraction and side-marker detection.
Exports: normalize_name, normalize_numbers, extract_numbers, singularize,
         subject_prefix, pure_name, Side, detect_side, effective_side, sides_conflict
Used by: Fuzzy scoring, the fuzzy bone strategy and the material matcher.
"""

from __future__ import annotations

from .normalize import (
    extract_numbers,
    normalize_name,
    normalize_numbers,
    pure_name,
    singularize,
    subject_prefix,
)
from .side import (
    Side,
    detect_side,
    effective_side,
    sides_conflict,
)

__all__ = [
    # normalize
    "normalize_name",
    "normalize_numbers",
    "extract_numbers",
    "singularize",
    "subject_prefix",
    "pure_name",
    # side
    "Side",
    "detect_side",
    "effective_side",
    "sides_conflict",
]
