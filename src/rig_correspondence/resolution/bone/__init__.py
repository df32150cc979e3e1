"""
bone
====

Source-to-target node resolution:
- models       : MatchResult, Decision, Resolution and errors
- strategies   : exact path / exact name at depth / fuzzy name
- manager      : priority chain with manual mappings
- escalation   : decision policies, DecisionCache, StopSignal
- materializer : batch-scoped cache, escalation and fabrication
"""

from .escalation import (
    DecisionCache,
    DecisionMaker,
    ScriptedPolicy,
    StopSignal,
    create_new_policy,
    first_candidate_policy,
    skip_policy,
    stop_policy,
)
from .manager import BoneMappingManager, default_strategies
from .materializer import (
    BatchSession,
    CorrespondenceCache,
    Materializer,
)
from .models import (
    HIGH_CONFIDENCE,
    CachedDecision,
    Choice,
    Decision,
    EscalationRequest,
    FabricationFailed,
    InvalidDecision,
    MatchResult,
    Resolution,
    ResolutionStatus,
)
from .strategies import (
    BoneMappingStrategy,
    ExactNameStrategy,
    ExactPathStrategy,
    FuzzyNameStrategy,
)

__all__ = [
    # models
    "HIGH_CONFIDENCE",
    "MatchResult",
    "Choice",
    "Decision",
    "CachedDecision",
    "EscalationRequest",
    "ResolutionStatus",
    "Resolution",
    "FabricationFailed",
    "InvalidDecision",
    # strategies
    "BoneMappingStrategy",
    "ExactPathStrategy",
    "ExactNameStrategy",
    "FuzzyNameStrategy",
    # chain
    "BoneMappingManager",
    "default_strategies",
    # escalation
    "DecisionMaker",
    "DecisionCache",
    "StopSignal",
    "ScriptedPolicy",
    "first_candidate_policy",
    "create_new_policy",
    "skip_policy",
    "stop_policy",
    # materializer
    "CorrespondenceCache",
    "BatchSession",
    "Materializer",
]

__docformat__ = "google"
