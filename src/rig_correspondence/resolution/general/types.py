# rig_correspondence/resolution/general/types.py
from __future__ import annotations

from typing import Protocol

"""
types.py.

Does: Structural Protocol for anything matched by its name alone
(engine materials in the slot cascade and the suggestion ranker).
"""


class Named(Protocol):
    name: str


__all__ = ["Named"]

__docformat__ = "google"
