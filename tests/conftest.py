# tests/conftest.py
from __future__ import annotations

import pytest

from rig_correspondence.resolution.general.fuzzy import get_common_variants
from rig_correspondence.resolution.general.utils import clear_config_cache, reload_topics
from rig_correspondence.resolution.hierarchy import TreeNode


# ── Isolation ────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Use the packaged data/ dir and silence topic tracing in every test."""
    for var in ("RIG_CORRESPONDENCE_DATA_DIR", "DATA_DIR", "RIG_DEBUG_TOPICS"):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    reload_topics()
    yield
    clear_config_cache()
    get_common_variants.cache_clear()


# ── Rig builders ─────────────────────────────────────────────────────────────
@pytest.fixture
def build():
    """Build a rig from slash paths: build("Target", ["Hips/Spine"])."""
    return TreeNode.from_paths


def node_at(root: TreeNode, path: str) -> TreeNode:
    node = root
    for part in path.split("/"):
        child = node.find_child(part)
        assert child is not None, f"{path!r} missing under {root!r}"
        node = child
    return node


@pytest.fixture
def at():
    return node_at
