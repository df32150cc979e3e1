"""
rig_correspondence
==================

Does: Root package initializer for the rig correspondence resolver.
Returns: Re-exports the everyday entry points (tree model, materializer,
         decisions, batch driver, material matching) from `resolution.*`.
Used by: Tool front-ends, the demo and tests.
"""

from rig_correspondence.resolution.bone import (
    BatchSession,
    BoneMappingManager,
    Choice,
    Decision,
    FabricationFailed,
    InvalidDecision,
    Materializer,
    MatchResult,
    Resolution,
    ResolutionStatus,
    ScriptedPolicy,
)
from rig_correspondence.resolution.hierarchy import (
    LocalTransform,
    TreeNode,
    format_path,
    path_of,
    resolve_path,
)
from rig_correspondence.resolution.material import MaterialSlot, find_best_material
from rig_correspondence.resolution.orchestrator import (
    Attachable,
    BatchReport,
    NodeOutcome,
    OutcomeStatus,
    run_transfer_batch,
)

__all__: list[str] = [
    "TreeNode",
    "LocalTransform",
    "path_of",
    "resolve_path",
    "format_path",
    "MatchResult",
    "Choice",
    "Decision",
    "Resolution",
    "ResolutionStatus",
    "FabricationFailed",
    "InvalidDecision",
    "BoneMappingManager",
    "BatchSession",
    "Materializer",
    "ScriptedPolicy",
    "MaterialSlot",
    "find_best_material",
    "Attachable",
    "OutcomeStatus",
    "NodeOutcome",
    "BatchReport",
    "run_transfer_batch",
]
__docformat__ = "google"
