# tests/test_material_matcher.py
from __future__ import annotations

from dataclasses import dataclass

import pytest

from rig_correspondence.resolution.material import (
    MaterialSlot,
    calculate_score,
    clean_name,
    find_best_material,
    rank_materials,
)


@dataclass(frozen=True)
class Mat:
    name: str


def mats(*names):
    return [Mat(n) if n is not None else None for n in names]


# ── clean_name ───────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Body (Instance)", "body"),
        ("Hair.001", "hair"),
        ("Skin_Mat", "skin"),
        ("Skin_material", "skin"),
        ("Cloth Copy", "cloth"),
        ("Fuyu_cloth-white", "fuyuclothwhite"),
        ("", ""),
        (None, ""),
    ],
)
def test_clean_name(raw, expected):
    assert clean_name(raw) == expected


# ── calculate_score ──────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "target, candidate, expected",
    [
        ("body", "body", 100),
        ("clothwhite", "clothwhites", 90),          # near-length containment
        ("bag", "bagfur", 35),                      # lopsided containment: int(70 · 0.5)
        ("fuyuclothwhite", "fuyuclothblue", 85),    # colour variant
        ("skin", "hair", 20),                       # edit distance 3 of 4
    ],
)
def test_calculate_score(target, candidate, expected):
    assert calculate_score(target, candidate) == expected


# ── find_best_material cascade ───────────────────────────────────────────────
def test_same_slot_variant_wins_over_exact_elsewhere():
    slot = MaterialSlot(slot_index=0, fuzzy_name="Cloth_White")
    candidates = mats("Cloth_Blue", "Cloth_White")
    assert find_best_material(slot, candidates) is candidates[0]


def test_exact_match_in_another_slot():
    slot = MaterialSlot(slot_index=0, material_name="Skin")
    candidates = mats("Hair", "Skin (Instance)")
    assert find_best_material(slot, candidates) is candidates[1]


def test_qualified_candidates_sorted_by_edit_distance():
    slot = MaterialSlot(slot_index=0, fuzzy_name="Cloth_White")
    candidates = mats("Hair", "Cloth_Blue", "Cloth_Whit")
    assert find_best_material(slot, candidates) is candidates[2]


def test_fuzzy_name_preferred_over_material_name():
    slot = MaterialSlot(slot_index=5, fuzzy_name="Eyes", material_name="Hair")
    candidates = mats("Hair", "Eyes")
    assert find_best_material(slot, candidates) is candidates[1]


def test_slot_index_fallback_without_names():
    candidates = mats("A", "B")
    assert find_best_material(MaterialSlot(slot_index=1), candidates) is candidates[1]
    assert find_best_material(MaterialSlot(slot_index=4), candidates) is None


def test_nothing_close_enough():
    slot = MaterialSlot(slot_index=0, fuzzy_name="Skin")
    assert find_best_material(slot, mats("Hair", "Eyes")) is None
    assert find_best_material(slot, []) is None


def test_empty_slots_are_skipped():
    slot = MaterialSlot(slot_index=0, fuzzy_name="Body")
    candidates = mats(None, "Body_Mat")
    assert find_best_material(slot, candidates) is candidates[1]


# ── rank_materials ───────────────────────────────────────────────────────────
def test_rank_materials_orders_by_name_similarity():
    candidates = mats("Wrist", "Hand_L", None, "Head")
    ranked = rank_materials("Hand", candidates, limit=2)
    assert len(ranked) == 2
    assert ranked[0][0] is candidates[1]
    assert ranked[0][1] > ranked[1][1]
