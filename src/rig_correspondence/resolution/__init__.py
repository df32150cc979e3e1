# rig_correspondence/resolution/__init__.py

"""
resolution.
===========

Does: Group the resolution stack: hierarchy model, general token/fuzzy
      helpers, bone strategies and materializer, material matching and the
      batch transfer driver.
Used by: rig_correspondence (top-level re-exports), demo and tests.
"""
from __future__ import annotations

__all__: list[str] = []
__docformat__ = "google"
