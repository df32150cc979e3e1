# rig_correspondence/resolution/general/utils/__init__.py
"""

Does: Provide config loading and topic-gated debug tracing for the resolution stack.
Returns: Public API via load_config/clear_config_cache and debug/set_topics.
Used by: Synonym-table loaders, strategies, the demo and tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    clear_config_cache,
    load_config,
    temp_data_dir,
)
from .log import (
    debug,
    is_topic_enabled,
    reload_topics,
    set_topics,
)

__all__ = [
    # Config loading
    "load_config",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "is_topic_enabled",
    "reload_topics",
    "set_topics",
]
