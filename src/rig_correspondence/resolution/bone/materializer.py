# rig_correspondence/resolution/bone/materializer.py
"""
materializer.py

Does: Resolve a source node to its counterpart under a target root, caching
      the answer for the rest of the batch:
        stop signal → correspondence cache → root self-map → direct path →
        strategy chain → (ambiguity: remembered decision or escalation) →
        fabrication of the missing path.
      Fabricated nodes join the session's exclusion set so later name-based
      lookups never land on scaffolding.
Returns: Resolution values (resolve_outcome) or the bare node (resolve).
Used by: orchestrator.run_transfer_batch, demo, tests.
"""

from __future__ import annotations

import logging
from typing import Optional

from rig_correspondence.resolution.bone.escalation import (
    DecisionCache,
    DecisionMaker,
    StopSignal,
    first_candidate_policy,
)
from rig_correspondence.resolution.bone.manager import BoneMappingManager
from rig_correspondence.resolution.bone.models import (
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
from rig_correspondence.resolution.hierarchy import (
    NodePath,
    TreeNode,
    format_path,
    path_of,
    resolve_path,
)

__all__ = ["CorrespondenceCache", "BatchSession", "Materializer"]

log = logging.getLogger(__name__)

ROOT_STRATEGY = "root"
DIRECT_PATH_STRATEGY = "direct_path"


# ─────────────────────────────────────────────────────────────────────────────
# 1) Batch-scoped state
# ─────────────────────────────────────────────────────────────────────────────

class CorrespondenceCache:
    """Source node → target node for one (source root, target root) pair."""

    def __init__(self) -> None:
        self._entries: dict[TreeNode, TreeNode] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    def get(self, source: TreeNode) -> Optional[TreeNode]:
        return self._entries.get(source)

    def put(self, source: TreeNode, target: TreeNode) -> None:
        self._entries[source] = target

    def clear(self) -> None:
        self._entries.clear()


class BatchSession:
    """
    Everything that must survive across target roots within one batch and be
    dropped before the next: remembered decisions, the stop signal and the
    set of fabricated nodes excluded from name-based matching.
    """

    def __init__(self) -> None:
        self.decisions = DecisionCache()
        self.stop = StopSignal()
        self.excluded: set[TreeNode] = set()

    @property
    def stopped(self) -> bool:
        return self.stop.stopped

    def reset(self) -> None:
        self.decisions.clear()
        self.stop.reset()
        self.excluded.clear()


# ─────────────────────────────────────────────────────────────────────────────
# 2) Materializer
# ─────────────────────────────────────────────────────────────────────────────

class Materializer:
    def __init__(
        self,
        source_root: TreeNode,
        session: Optional[BatchSession] = None,
        decision_maker: Optional[DecisionMaker] = None,
        manager: Optional[BoneMappingManager] = None,
    ):
        self.source_root = source_root
        self.session = session if session is not None else BatchSession()
        self.decision_maker: DecisionMaker = decision_maker or first_candidate_policy
        self.manager = manager if manager is not None else BoneMappingManager()
        self._caches: dict[TreeNode, CorrespondenceCache] = {}

    # ── public API ───────────────────────────────────────────────────────────
    def resolve(
        self,
        source: TreeNode,
        target_root: Optional[TreeNode],
        create_if_missing: bool = True,
    ) -> Optional[TreeNode]:
        return self.resolve_outcome(source, target_root, create_if_missing).target

    def resolve_outcome(
        self,
        source: TreeNode,
        target_root: Optional[TreeNode],
        create_if_missing: bool = True,
    ) -> Resolution:
        if self.session.stopped:
            return Resolution(ResolutionStatus.STOPPED)

        if target_root is None:
            if create_if_missing:
                raise FabricationFailed(f"no target root to resolve {source!r} under")
            return Resolution(ResolutionStatus.NOT_FOUND)

        cache = self.cache_for(target_root)
        hit = cache.get(source)
        if hit is not None:
            log.debug("Cache hit %r -> %r", source, hit)
            return Resolution(ResolutionStatus.CACHED, target=hit)

        source_path = path_of(self.source_root, source)
        if source_path is None:
            if create_if_missing:
                raise FabricationFailed(f"{source!r} is not under source root {self.source_root!r}")
            return Resolution(ResolutionStatus.NOT_FOUND)

        if not source_path:
            return self._accept(source, target_root, ROOT_STRATEGY, 1.0, target_root=target_root)

        direct = resolve_path(target_root, source_path)
        if direct is not None:
            return self._accept(source, direct, DIRECT_PATH_STRATEGY, 1.0, target_root=target_root)

        result = self.manager.find_best_match(
            source, self.source_root, target_root, self.session.excluded
        )
        if result is not None:
            if not result.is_ambiguous:
                return self._accept(
                    source,
                    result.target,
                    result.strategy,
                    result.confidence,
                    target_root=target_root,
                    candidates=result.candidates,
                )
            return self._settle_ambiguity(source, source_path, target_root, result)

        if create_if_missing:
            return self._fabricate(source, source_path, target_root)

        log.debug("No counterpart for %s under %r", format_path(source_path), target_root)
        return Resolution(ResolutionStatus.NOT_FOUND)

    def cache_for(self, target_root: TreeNode) -> CorrespondenceCache:
        cache = self._caches.get(target_root)
        if cache is None:
            cache = self._caches[target_root] = CorrespondenceCache()
        return cache

    def clear_caches(self) -> None:
        for cache in self._caches.values():
            cache.clear()
        self._caches.clear()

    # ── ambiguity ────────────────────────────────────────────────────────────
    def _settle_ambiguity(
        self,
        source: TreeNode,
        source_path: NodePath,
        target_root: TreeNode,
        result: MatchResult,
    ) -> Resolution:
        remembered = self.session.decisions.get(source)
        if remembered is not None:
            replayed = self._replay(remembered, source, source_path, target_root, result)
            if replayed is not None:
                return replayed
            log.info(
                "Remembered selection %s for %r is missing under %r; asking again",
                format_path(remembered.selected_path), source, target_root,
            )

        candidate_paths = tuple(path_of(target_root, c) or () for c in result.candidates)
        request = EscalationRequest(
            source=source,
            source_path=source_path,
            target_root=target_root,
            candidates=result.candidates,
            candidate_paths=candidate_paths,
            result=result,
        )
        log.debug(
            "Escalating %s: %d candidates (%s, %.2f)",
            format_path(source_path), len(result.candidates), result.strategy, result.confidence,
        )
        decision = self.decision_maker(request)
        return self._apply(decision, source, source_path, target_root, result)

    def _apply(
        self,
        decision: Decision,
        source: TreeNode,
        source_path: NodePath,
        target_root: TreeNode,
        result: MatchResult,
    ) -> Resolution:
        if not isinstance(decision, Decision):
            raise InvalidDecision(f"expected a Decision, got {type(decision).__name__}")

        choice = decision.choice
        if choice is Choice.STOP:
            self.session.stop.raise_stop()
            return Resolution(ResolutionStatus.STOPPED, candidates=result.candidates)

        if choice is Choice.SELECT_CANDIDATE:
            index = decision.index
            if index is None or not 0 <= index < len(result.candidates):
                raise InvalidDecision(
                    f"candidate index {index!r} out of range for {len(result.candidates)} candidates"
                )
            target = result.candidates[index]
            if decision.remember:
                self.session.decisions.put(
                    source, CachedDecision(choice, selected_path=path_of(target_root, target))
                )
            return self._accept(
                source,
                target,
                result.strategy,
                result.confidence,
                target_root=target_root,
                candidates=result.candidates,
            )

        if decision.remember:
            self.session.decisions.put(source, CachedDecision(choice))

        if choice is Choice.CREATE_NEW:
            return self._fabricate(source, source_path, target_root)
        if choice is Choice.SKIP:
            log.debug("Skipping %s by decision", format_path(source_path))
            return Resolution(ResolutionStatus.SKIPPED, candidates=result.candidates)

        raise InvalidDecision(f"unsupported choice: {choice!r}")

    def _replay(
        self,
        remembered: CachedDecision,
        source: TreeNode,
        source_path: NodePath,
        target_root: TreeNode,
        result: MatchResult,
    ) -> Optional[Resolution]:
        """Apply a remembered decision; None when a remembered selection no longer resolves."""
        log.debug("Reusing %s for %s", remembered.choice.value, format_path(source_path))
        if remembered.choice is Choice.SELECT_CANDIDATE:
            if remembered.selected_path is None:
                return None
            target = resolve_path(target_root, remembered.selected_path)
            if target is None:
                return None
            return self._accept(
                source,
                target,
                result.strategy,
                result.confidence,
                target_root=target_root,
                candidates=result.candidates,
            )
        if remembered.choice is Choice.CREATE_NEW:
            return self._fabricate(source, source_path, target_root)
        return Resolution(ResolutionStatus.SKIPPED, candidates=result.candidates)

    # ── results ──────────────────────────────────────────────────────────────
    def _accept(
        self,
        source: TreeNode,
        target: TreeNode,
        strategy: str,
        confidence: float,
        *,
        target_root: TreeNode,
        candidates: tuple[TreeNode, ...] = (),
    ) -> Resolution:
        self.cache_for(target_root).put(source, target)
        log.debug("Matched %r -> %r via %s (%.2f)", source, target, strategy, confidence)
        return Resolution(
            ResolutionStatus.MATCHED,
            target=target,
            strategy=strategy,
            confidence=confidence,
            candidates=candidates,
        )

    def _fabricate(
        self,
        source: TreeNode,
        source_path: NodePath,
        target_root: TreeNode,
    ) -> Resolution:
        """
        Create every missing segment of `source_path` under `target_root`.
        Existing children with the exact segment name are reused; each new
        segment copies the transform of the source node at the same level.
        """
        if not source_path:
            raise FabricationFailed("cannot fabricate the target root itself")

        source_chain: list[TreeNode] = []
        node: Optional[TreeNode] = source
        while node is not None and node is not self.source_root:
            source_chain.append(node)
            node = node.parent
        source_chain.reverse()

        current = target_root
        created = 0
        for name, counterpart in zip(source_path, source_chain):
            if not name:
                raise FabricationFailed(f"empty segment in {format_path(source_path)!r}")
            child = current.find_child(name)
            if child is None:
                child = current.add_child(name, transform=counterpart.transform)
                self.session.excluded.add(child)
                created += 1
            current = child

        self.cache_for(target_root).put(source, current)
        log.info(
            "Fabricated %s under %r (%d new node%s)",
            format_path(source_path), target_root, created, "" if created == 1 else "s",
        )
        return Resolution(ResolutionStatus.FABRICATED, target=current)
