# rig_correspondence/resolution/bone/models.py
"""
models.py.

Does: Value types exchanged between strategies, the materializer and the
      decision maker: MatchResult, Choice/Decision, CachedDecision,
      EscalationRequest, ResolutionStatus/Resolution, and the two errors.
Used by: bone.strategies, bone.manager, bone.escalation, bone.materializer,
         orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rig_correspondence.resolution.hierarchy import NodePath, TreeNode

__all__ = [
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
]

# Results at or above this confidence are accepted without escalation.
HIGH_CONFIDENCE = 0.8


# ── Errors ───────────────────────────────────────────────────────────────────
class FabricationFailed(RuntimeError):
    """Raise when a missing target path cannot be created."""


class InvalidDecision(ValueError):
    """Raise when a decision maker answers with something unusable."""


# ── Strategy output ──────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MatchResult:
    """
    One strategy's answer for one source node. When `candidates` is non-empty
    the target is always its first element.
    """

    target: TreeNode
    confidence: float
    strategy: str
    candidates: tuple[TreeNode, ...] = ()

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence out of range: {self.confidence}")
        if self.candidates and self.candidates[0] is not self.target:
            raise ValueError("target must be the first candidate")

    @property
    def is_high_confidence(self) -> bool:
        return self.confidence >= HIGH_CONFIDENCE

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1 and not self.is_high_confidence


# ── Escalation contract ──────────────────────────────────────────────────────
class Choice(str, Enum):
    SELECT_CANDIDATE = "select_candidate"
    CREATE_NEW = "create_new"
    SKIP = "skip"
    STOP = "stop"


@dataclass(frozen=True)
class Decision:
    """
    The decision maker's answer. `remember=True` lets the answer be replayed for
    the same source node under other target roots in the same batch.
    """

    choice: Choice
    index: Optional[int] = None
    remember: bool = True

    @classmethod
    def select(cls, index: int, *, remember: bool = True) -> Decision:
        return cls(Choice.SELECT_CANDIDATE, index=index, remember=remember)

    @classmethod
    def create_new(cls, *, remember: bool = True) -> Decision:
        return cls(Choice.CREATE_NEW, remember=remember)

    @classmethod
    def skip(cls, *, remember: bool = True) -> Decision:
        return cls(Choice.SKIP, remember=remember)

    @classmethod
    def stop(cls) -> Decision:
        return cls(Choice.STOP)


@dataclass(frozen=True)
class CachedDecision:
    """A remembered decision; selections are stored as paths relative to their target root."""

    choice: Choice
    selected_path: Optional[NodePath] = None


@dataclass(frozen=True)
class EscalationRequest:
    source: TreeNode
    source_path: NodePath
    target_root: TreeNode
    candidates: tuple[TreeNode, ...]
    candidate_paths: tuple[NodePath, ...]
    result: MatchResult


# ── Materializer output ──────────────────────────────────────────────────────
class ResolutionStatus(str, Enum):
    MATCHED = "matched"
    CACHED = "cached"
    FABRICATED = "fabricated"
    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Resolution:
    status: ResolutionStatus
    target: Optional[TreeNode] = None
    strategy: Optional[str] = None
    confidence: float = 0.0
    candidates: tuple[TreeNode, ...] = field(default=(), repr=False)

    @property
    def resolved(self) -> bool:
        return self.target is not None
