# rig_correspondence/resolution/bone/escalation.py
"""
escalation.py

Does: The ambiguity-escalation contract and its batch-scoped state:
      - DecisionMaker: callable from EscalationRequest to Decision
      - ready-made policies (first candidate, create, skip, stop, scripted)
      - DecisionCache: remembered decisions keyed by source node, replayable
        under other target roots of the same batch
      - StopSignal: sticky "user aborted" flag shared by the whole batch
Used by: bone.materializer and orchestrator; tests inject ScriptedPolicy.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from rig_correspondence.resolution.bone.models import (
    CachedDecision,
    Choice,
    Decision,
    EscalationRequest,
)
from rig_correspondence.resolution.hierarchy import TreeNode

__all__ = [
    "DecisionMaker",
    "first_candidate_policy",
    "create_new_policy",
    "skip_policy",
    "stop_policy",
    "ScriptedPolicy",
    "DecisionCache",
    "StopSignal",
]

log = logging.getLogger(__name__)

DecisionMaker = Callable[[EscalationRequest], Decision]


# ─────────────────────────────────────────────────────────────────────────────
# 1) Policies
# ─────────────────────────────────────────────────────────────────────────────

def first_candidate_policy(request: EscalationRequest) -> Decision:
    """Take the best-ranked candidate. Used when no decision maker is injected."""
    return Decision.select(0)


def create_new_policy(request: EscalationRequest) -> Decision:
    return Decision.create_new()


def skip_policy(request: EscalationRequest) -> Decision:
    return Decision.skip()


def stop_policy(request: EscalationRequest) -> Decision:
    return Decision.stop()


class ScriptedPolicy:
    """
    Deterministic decision maker for harnesses: answers with the queued
    decisions in order, then with `default` once the queue is empty.
    Every request received is kept in `requests`.
    """

    def __init__(self, decisions: Iterable[Decision] = (), default: Optional[Decision] = None):
        self._queue = list(decisions)
        self._default = default if default is not None else Decision.select(0)
        self.requests: list[EscalationRequest] = []

    def __call__(self, request: EscalationRequest) -> Decision:
        self.requests.append(request)
        if self._queue:
            return self._queue.pop(0)
        return self._default


# ─────────────────────────────────────────────────────────────────────────────
# 2) Batch-scoped state
# ─────────────────────────────────────────────────────────────────────────────

class DecisionCache:
    """Source node → remembered decision, shared by every target root of one batch."""

    def __init__(self) -> None:
        self._entries: dict[TreeNode, CachedDecision] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    def get(self, source: TreeNode) -> Optional[CachedDecision]:
        return self._entries.get(source)

    def put(self, source: TreeNode, decision: CachedDecision) -> None:
        if decision.choice is Choice.STOP:
            # stop is carried by StopSignal, never replayed per node
            return
        self._entries[source] = decision
        log.debug("Remembered %s for %r", decision.choice.value, source)

    def clear(self) -> None:
        self._entries.clear()


class StopSignal:
    """Once raised, stays raised until the next batch resets it."""

    def __init__(self) -> None:
        self._stopped = False

    def __bool__(self) -> bool:
        return self._stopped

    @property
    def stopped(self) -> bool:
        return self._stopped

    def raise_stop(self) -> None:
        if not self._stopped:
            log.info("Stop requested; remaining resolutions in this batch are short-circuited")
        self._stopped = True

    def reset(self) -> None:
        self._stopped = False
