# orchestrator.py
from __future__ import annotations

"""
orchestrator.py
===============

Does: Batch transfer driver. For every target root and every attachable
      payload found under the source root, resolve the payload's node and
      the nodes it references, hand them to the caller's `copy_payload`
      capability and record what happened.
Returns:
  - run_transfer_batch(source_root, target_roots, payloads, copy_payload, ...) -> BatchReport
      BatchReport.outcomes : list[NodeOutcome] in processing order
      BatchReport.stopped  : True once a Stop decision ended the batch
Used by: Tool front-ends and the demo; tests drive it with scripted decisions.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from rig_correspondence.resolution.bone import (
    BatchSession,
    BoneMappingManager,
    DecisionMaker,
    FabricationFailed,
    Materializer,
    Resolution,
    ResolutionStatus,
)
from rig_correspondence.resolution.hierarchy import TreeNode, format_path, path_of

logger = logging.getLogger(__name__)

__all__ = [
    "Attachable",
    "OutcomeStatus",
    "NodeOutcome",
    "BatchReport",
    "CopyPayload",
    "run_transfer_batch",
]


# =============================================================================
# Models
# =============================================================================


@dataclass(frozen=True)
class Attachable:
    """
    An opaque payload living on a source node (physics bone, collider,
    constraint...). `references` are other source nodes it points at; `data`
    is whatever the caller's copy routine needs.
    """

    node: TreeNode
    kind: str
    references: tuple[TreeNode, ...] = ()
    data: Any = None


class OutcomeStatus(str, Enum):
    MATCHED = "matched"
    FABRICATED = "fabricated"
    SKIPPED = "skipped"
    FAILED = "failed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class NodeOutcome:
    payload: Attachable
    target_root: TreeNode
    status: OutcomeStatus
    target: Optional[TreeNode] = None
    strategy: Optional[str] = None
    confidence: float = 0.0
    missing_references: tuple[TreeNode, ...] = ()
    error: Optional[str] = None


@dataclass
class BatchReport:
    outcomes: list[NodeOutcome] = field(default_factory=list)
    stopped: bool = False

    @property
    def succeeded(self) -> list[NodeOutcome]:
        return [
            o for o in self.outcomes
            if o.status in (OutcomeStatus.MATCHED, OutcomeStatus.FABRICATED)
        ]

    def counts(self) -> dict[OutcomeStatus, int]:
        return dict(Counter(o.status for o in self.outcomes))

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)


# (payload, target node, source reference -> target reference or None) -> result.
# An explicit False result is recorded as a failure; anything else is success.
CopyPayload = Callable[[Attachable, TreeNode, Mapping[TreeNode, Optional[TreeNode]]], Any]


# =============================================================================
# Helpers
# =============================================================================

_STATUS_FROM_RESOLUTION = {
    ResolutionStatus.MATCHED: OutcomeStatus.MATCHED,
    ResolutionStatus.CACHED: OutcomeStatus.MATCHED,
    ResolutionStatus.FABRICATED: OutcomeStatus.FABRICATED,
    ResolutionStatus.SKIPPED: OutcomeStatus.SKIPPED,
    ResolutionStatus.NOT_FOUND: OutcomeStatus.SKIPPED,
    ResolutionStatus.STOPPED: OutcomeStatus.STOPPED,
}


def _describe(source_root: TreeNode, node: TreeNode) -> str:
    return format_path(path_of(source_root, node)) or node.name


def _log_outcome(outcome: NodeOutcome, source_root: TreeNode) -> None:
    where = _describe(source_root, outcome.payload.node)
    if outcome.status in (OutcomeStatus.MATCHED, OutcomeStatus.FABRICATED):
        logger.info(
            "[%s] %s -> %r (%s, %s, %.2f)",
            outcome.payload.kind,
            where,
            outcome.target,
            outcome.status.value,
            outcome.strategy or "-",
            outcome.confidence,
        )
    else:
        logger.warning(
            "[%s] %s %s%s",
            outcome.payload.kind,
            where,
            outcome.status.value,
            f": {outcome.error}" if outcome.error else "",
        )


def _resolve_references(
    materializer: Materializer,
    payload: Attachable,
    target_root: TreeNode,
    create_if_missing: bool,
) -> tuple[dict[TreeNode, Optional[TreeNode]], bool]:
    """Resolve every referenced node; returns (reference map, stopped)."""
    reference_map: dict[TreeNode, Optional[TreeNode]] = {}
    for ref in payload.references:
        if ref in reference_map:
            continue
        try:
            resolution = materializer.resolve_outcome(ref, target_root, create_if_missing)
        except FabricationFailed as e:
            logger.warning("[%s] reference %r unresolved: %s", payload.kind, ref, e)
            reference_map[ref] = None
            continue
        if resolution.status is ResolutionStatus.STOPPED:
            return reference_map, True
        reference_map[ref] = resolution.target
    return reference_map, False


def _transfer_one(
    materializer: Materializer,
    payload: Attachable,
    target_root: TreeNode,
    copy_payload: CopyPayload,
    create_if_missing: bool,
) -> NodeOutcome:
    try:
        resolution: Resolution = materializer.resolve_outcome(
            payload.node, target_root, create_if_missing
        )
    except FabricationFailed as e:
        return NodeOutcome(payload, target_root, OutcomeStatus.FAILED, error=str(e))

    status = _STATUS_FROM_RESOLUTION[resolution.status]
    if resolution.target is None:
        return NodeOutcome(payload, target_root, status)

    reference_map, stopped = _resolve_references(
        materializer, payload, target_root, create_if_missing
    )
    if stopped:
        return NodeOutcome(payload, target_root, OutcomeStatus.STOPPED, target=resolution.target)

    missing = tuple(ref for ref, tgt in reference_map.items() if tgt is None)
    base = dict(
        target=resolution.target,
        strategy=resolution.strategy,
        confidence=resolution.confidence,
        missing_references=missing,
    )

    try:
        result = copy_payload(payload, resolution.target, reference_map)
    except Exception as e:
        logger.exception("[%s] copy onto %r raised", payload.kind, resolution.target)
        return NodeOutcome(payload, target_root, OutcomeStatus.FAILED, error=str(e), **base)

    if result is False:
        return NodeOutcome(
            payload, target_root, OutcomeStatus.FAILED, error="copy_payload reported failure", **base
        )
    return NodeOutcome(payload, target_root, status, **base)


# =============================================================================
# Public API
# =============================================================================


def run_transfer_batch(
    source_root: TreeNode,
    target_roots: Iterable[TreeNode],
    payloads: Sequence[Attachable],
    copy_payload: CopyPayload,
    decision_maker: Optional[DecisionMaker] = None,
    session: Optional[BatchSession] = None,
    create_if_missing: bool = True,
    manager: Optional[BoneMappingManager] = None,
) -> BatchReport:
    """
    Does: Transfer every payload onto every target root. The session is reset
          first, so decisions and scaffolding never leak in from a previous
          batch; decisions remembered under one target root are replayed for
          the next. A Stop decision ends the whole batch.
    Returns: BatchReport with one NodeOutcome per processed (payload, target root).
    """
    session = session if session is not None else BatchSession()
    session.reset()
    report = BatchReport()

    for target_root in target_roots:
        materializer = Materializer(
            source_root, session=session, decision_maker=decision_maker, manager=manager
        )
        logger.info("Transferring %d payload(s) onto %r", len(payloads), target_root)

        for payload in payloads:
            outcome = _transfer_one(
                materializer, payload, target_root, copy_payload, create_if_missing
            )
            report.outcomes.append(outcome)
            _log_outcome(outcome, source_root)

            if outcome.status is OutcomeStatus.STOPPED:
                report.stopped = True
                logger.warning("Batch stopped; %s", report.counts())
                return report

    logger.info("Batch finished: %s", report.counts())
    return report
