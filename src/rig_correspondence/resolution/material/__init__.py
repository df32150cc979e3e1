"""
material
========

Material-slot matching (sibling consumer of the name scoring):
- matcher : slot cascade, score function, name cleaning, suggestions
"""

from .matcher import (
    MaterialSlot,
    calculate_score,
    clean_name,
    find_best_material,
    rank_materials,
)

__all__ = [
    "MaterialSlot",
    "clean_name",
    "calculate_score",
    "find_best_material",
    "rank_materials",
]

__docformat__ = "google"
