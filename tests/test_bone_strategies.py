# tests/test_bone_strategies.py
from __future__ import annotations

import pytest

from rig_correspondence.resolution.bone import (
    BoneMappingManager,
    BoneMappingStrategy,
    ExactNameStrategy,
    ExactPathStrategy,
    FuzzyNameStrategy,
    MatchResult,
)
from rig_correspondence.resolution.bone.strategies import score_candidates
from rig_correspondence.resolution.hierarchy import TreeNode


# ── Helpers ──────────────────────────────────────────────────────────────────
class RecordingStrategy:
    """Strategy stub that records calls and answers with a fixed result."""

    def __init__(self, name, priority, answer=None):
        self.name = name
        self.priority = priority
        self.answer = answer
        self.calls = []

    def find_target(self, source, source_root, target_root, exclude=None):
        self.calls.append(source)
        return self.answer(target_root) if callable(self.answer) else self.answer


class SpyExactName(ExactNameStrategy):
    def __init__(self):
        self.calls = 0

    def find_target(self, *args, **kwargs):
        self.calls += 1
        return super().find_target(*args, **kwargs)


class SpyFuzzy(FuzzyNameStrategy):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def find_target(self, *args, **kwargs):
        self.calls += 1
        return super().find_target(*args, **kwargs)


# ── Contract ─────────────────────────────────────────────────────────────────
def test_strategies_satisfy_protocol():
    for strategy in (ExactPathStrategy(), ExactNameStrategy(), FuzzyNameStrategy()):
        assert isinstance(strategy, BoneMappingStrategy)
    assert [s.priority for s in (ExactPathStrategy(), ExactNameStrategy(), FuzzyNameStrategy())] == [1, 2, 3]


def test_match_result_invariants():
    a, b = TreeNode("A"), TreeNode("B")
    with pytest.raises(ValueError):
        MatchResult(target=a, confidence=1.5, strategy="x")
    with pytest.raises(ValueError):
        MatchResult(target=a, confidence=0.6, strategy="x", candidates=(b, a))
    ambiguous = MatchResult(target=a, confidence=0.6, strategy="x", candidates=(a, b))
    assert ambiguous.is_ambiguous and not ambiguous.is_high_confidence
    confident = MatchResult(target=a, confidence=0.9, strategy="x", candidates=(a, b))
    assert confident.is_high_confidence and not confident.is_ambiguous


# ── Exact path ───────────────────────────────────────────────────────────────
def test_scenario_a_exact_path(build, at):
    source = build("Source", ["Hips/Spine/Chest"])
    target = build("Target", ["Hips/Spine/Chest"])
    result = ExactPathStrategy().find_target(at(source, "Hips/Spine/Chest"), source, target)
    assert result.target is at(target, "Hips/Spine/Chest")
    assert result.confidence == 1.0
    assert result.candidates == ()


def test_exact_path_root_and_foreign_nodes(build):
    source = build("Source", ["Hips"])
    target = build("Target", ["Hips"])
    assert ExactPathStrategy().find_target(source, source, target).target is target
    assert ExactPathStrategy().find_target(TreeNode("Loose"), source, target) is None


# ── Exact name at depth ──────────────────────────────────────────────────────
def test_scenario_c_unique_name_at_depth(build, at):
    source = build("Source", ["Head/Eye.L"])
    target = build("Target", ["Face/Eye.L", "Face/EyeExtra.L"])
    result = ExactNameStrategy().find_target(at(source, "Head/Eye.L"), source, target)
    assert result.target is at(target, "Face/Eye.L")
    assert result.confidence == pytest.approx(0.85)
    assert result.candidates == ()


def test_exact_name_without_identical_name_finds_nothing(build, at):
    source = build("Source", ["Head/Eye.L"])
    target = build("Target", ["Face/EyeExtra.L"])
    assert ExactNameStrategy().find_target(at(source, "Head/Eye.L"), source, target) is None


def test_exact_name_shared_name_returns_all_candidates(build, at):
    source = build("Source", ["Hips/End"])
    target = build("Target", ["Arm/End", "Leg/End"])
    result = ExactNameStrategy().find_target(at(source, "Hips/End"), source, target)
    assert result.confidence == pytest.approx(0.6)
    assert result.candidates == (at(target, "Arm/End"), at(target, "Leg/End"))
    assert result.target is result.candidates[0]
    assert result.is_ambiguous


def test_exact_name_depth_gate(build, at):
    source = build("Source", ["Hips/Spine/End"])
    target = build("Target", ["Hips/End", "Hips/Spine/Chest/End"])
    assert ExactNameStrategy().find_target(at(source, "Hips/Spine/End"), source, target) is None


# ── Fuzzy name ───────────────────────────────────────────────────────────────
def test_scenario_b_plural_at_same_depth_beats_exact_name_deeper(build, at):
    source = build("Source", ["Hips/Spine/Breast_L"])
    target = build(
        "Target",
        ["Hips/Spine/Breasts_L", "Hips/Spine/Chest/Upper/Breast_L"],
    )
    result = BoneMappingManager().find_best_match(
        at(source, "Hips/Spine/Breast_L"), source, target
    )
    assert result.target is at(target, "Hips/Spine/Breasts_L")
    assert result.strategy == "fuzzy_name"
    assert result.is_high_confidence


def test_fuzzy_synonym_sibling_ranks_below_plural(build, at):
    source = build("Source", ["Hips/Spine/Breast_L"])
    target = build("Target", ["Hips/Spine/Chest", "Hips/Spine/Breasts_L"])
    ranked = score_candidates(at(source, "Hips/Spine/Breast_L"), source, target)
    assert [c.node.name for c in ranked] == ["Breasts_L", "Chest"]
    assert ranked[0].score > ranked[1].score
    assert all(0.0 <= c.name_score <= 1.0 for c in ranked)


def test_fuzzy_side_gate(build, at):
    source = build("Source", ["Hips/Arm_L"])
    target = build("Target", ["Hips/Arm_R"])
    assert FuzzyNameStrategy().find_target(at(source, "Hips/Arm_L"), source, target) is None


def test_fuzzy_same_side_matches(build, at):
    source = build("Source", ["Hips/Arm_L"])
    target = build("Target", ["Hips/Arm_R", "Hips/Arm.L"])
    result = FuzzyNameStrategy().find_target(at(source, "Hips/Arm_L"), source, target)
    assert result.target is at(target, "Hips/Arm.L")


def test_fuzzy_side_gate_reads_undelimited_indexed_markers(build, at):
    source = build("Source", ["Hips/UpperArmL1"])
    src = at(source, "Hips/UpperArmL1")
    opposite = build("Target", ["Hips/UpperArmR1"])
    assert FuzzyNameStrategy().find_target(src, source, opposite) is None

    both = build("Target", ["Hips/UpperArmR1", "Hips/UpperArm_L.1"])
    result = FuzzyNameStrategy().find_target(src, source, both)
    assert result.target is at(both, "Hips/UpperArm_L.1")


def test_fuzzy_keeps_multi_part_indices_apart(build, at):
    source = build("Source", ["Head/Hair.1.2"])
    target = build("Target", ["Head/Hair_12", "Head/Hair_1_2"])
    result = FuzzyNameStrategy().find_target(at(source, "Head/Hair.1.2"), source, target)
    assert result.target is at(target, "Head/Hair_1_2")
    assert result.confidence == 1.0


def test_fuzzy_depth_gate(build, at):
    source = build("Source", ["Hips/Tail"])
    target = build("Target", ["Tails", "Hips/Spine/Tails"])
    assert FuzzyNameStrategy().find_target(at(source, "Hips/Tail"), source, target) is None


def test_fuzzy_ties_keep_traversal_order_and_cap(build, at):
    source = build("Source", ["Hips/Tail"])
    names = ["TailA", "TailB", "TailC", "TailD", "TailE", "TailF"]
    target = build("Target", [f"Hips/{n}" for n in names])
    result = FuzzyNameStrategy().find_target(at(source, "Hips/Tail"), source, target)
    assert [c.name for c in result.candidates] == names[:5]
    assert result.target.name == "TailA"
    assert 0.65 < result.confidence < 0.8
    assert result.is_ambiguous


def test_fuzzy_lcs_breaks_score_ties(build, at):
    # both synonyms of "hand" score alike; "palm" shares a letter, "wrist" none
    source = build("Source", ["Arm/Hand"])
    target = build("Target", ["Arm/Wrist", "Arm/Palm"])
    ranked = score_candidates(at(source, "Arm/Hand"), source, target)
    assert [c.node.name for c in ranked] == ["Palm", "Wrist"]
    assert ranked[0].score == pytest.approx(ranked[1].score)
    assert ranked[0].lcs_length > ranked[1].lcs_length


# ── Exclusion ────────────────────────────────────────────────────────────────
def test_excluded_nodes_never_returned(build, at):
    source = build("Source", ["Hips/Tail"])
    target = build("Target", ["Pelvis/Tail"])
    src = at(source, "Hips/Tail")
    scaffold = at(target, "Pelvis/Tail")

    assert ExactNameStrategy().find_target(src, source, target).target is scaffold
    assert ExactNameStrategy().find_target(src, source, target, {scaffold}) is None
    assert FuzzyNameStrategy().find_target(src, source, target, {scaffold}) is None


# ── Chain ────────────────────────────────────────────────────────────────────
def test_priority_ordering_exact_path_short_circuits(build, at):
    source = build("Source", ["Hips/Spine/Chest"])
    target = build("Target", ["Hips/Spine/Chest"])
    exact_name, fuzzy = SpyExactName(), SpyFuzzy()
    manager = BoneMappingManager([fuzzy, exact_name, ExactPathStrategy()])

    result = manager.find_best_match(at(source, "Hips/Spine/Chest"), source, target)
    assert result.strategy == "exact_path"
    assert result.confidence == 1.0
    assert exact_name.calls == 0 and fuzzy.calls == 0
    assert [s.priority for s in manager.strategies] == [1, 2, 3]


def test_chain_returns_highest_confidence_when_none_is_confident():
    root = TreeNode("Root")
    low, mid = TreeNode("Low"), TreeNode("Mid")
    first = RecordingStrategy("first", 1, MatchResult(low, 0.3, "first"))
    second = RecordingStrategy("second", 2, MatchResult(mid, 0.7, "second"))
    third = RecordingStrategy("third", 3, None)
    manager = BoneMappingManager([third, second, first])

    result = manager.find_best_match(TreeNode("Src"), root, root)
    assert result.target is mid
    assert len(first.calls) == len(second.calls) == len(third.calls) == 1


def test_chain_fuzzy_overrides_shared_exact_name(build, at):
    source = build("Source", ["Hips/End"])
    target = build("Target", ["Arm/End", "Leg/End", "Hips/Ends"])
    src = at(source, "Hips/End")

    shared = ExactNameStrategy().find_target(src, source, target)
    assert shared.is_ambiguous

    result = BoneMappingManager().find_best_match(src, source, target)
    assert result.strategy == "fuzzy_name"
    assert result.target is at(target, "Hips/Ends")
    assert result.is_high_confidence


def test_manual_mapping_wins(build, at):
    source = build("Source", ["Hips/Spine/Chest"])
    target = build("Target", ["Hips/Spine/Chest", "Hips/Other"])
    manager = BoneMappingManager()
    src = at(source, "Hips/Spine/Chest")
    manager.add_manual_mapping(src, at(target, "Hips/Other"))

    result = manager.find_best_match(src, source, target)
    assert result.target is at(target, "Hips/Other")
    assert result.strategy == "manual" and result.confidence == 1.0

    manager.clear_manual_mappings()
    assert manager.find_best_match(src, source, target).strategy == "exact_path"


def test_manager_requires_a_strategy():
    with pytest.raises(ValueError):
        BoneMappingManager([])
