"""
strategies
==========

Bone-matching strategies, in priority order:
- exact_path : identical root-relative path (1.0)
- exact_name : identical name at identical depth (0.85 unique / 0.6 shared)
- fuzzy_name : gated prefix + path scoring with ranked candidates
"""

from .base import (
    BoneMappingStrategy,
    iter_target_candidates,
)
from .exact_name import ExactNameStrategy
from .exact_path import ExactPathStrategy
from .fuzzy_name import (
    FuzzyCandidate,
    FuzzyNameStrategy,
    score_candidates,
)

__all__ = [
    # contract
    "BoneMappingStrategy",
    "iter_target_candidates",
    # strategies
    "ExactPathStrategy",
    "ExactNameStrategy",
    "FuzzyNameStrategy",
    # fuzzy internals
    "FuzzyCandidate",
    "score_candidates",
]

__docformat__ = "google"
