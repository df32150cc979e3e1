"""
log.py.

Does: Topic-gated trace printer for resolver internals (per-candidate fuzzy
      scores and the like). Topics come from RIG_DEBUG_TOPICS (comma-separated,
      or 'all') or from set_topics(); nothing is printed while no topic is on.
Returns: Timestamped "[topic][LEVEL] message" lines on stderr.
Used by: The fuzzy strategy's candidate trace and the demo's --trace flag.
"""

import os
import sys
from datetime import datetime
from typing import Iterable, TextIO

__all__ = ["debug", "is_topic_enabled", "reload_topics", "set_topics"]

DEBUG_TOPICS_ENV = "RIG_DEBUG_TOPICS"
ALL_TOPICS = "all"


def _parse(raw: str) -> frozenset[str]:
    return frozenset(t.strip().lower() for t in raw.split(",") if t.strip())


_DEBUG_TOPICS = _parse(os.getenv(DEBUG_TOPICS_ENV, ""))


def reload_topics() -> None:
    """Does: Re-read RIG_DEBUG_TOPICS, replacing any topics set in code."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _parse(os.getenv(DEBUG_TOPICS_ENV, ""))


def set_topics(topics: Iterable[str]) -> None:
    """Does: Enable exactly `topics` for this process (an empty iterable silences tracing)."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _parse(",".join(topics))


def is_topic_enabled(topic: str) -> bool:
    return ALL_TOPICS in _DEBUG_TOPICS or topic.strip().lower() in _DEBUG_TOPICS


def debug(
    msg: str,
    topic: str = "resolution",
    *,
    level: str = "DEBUG",
    stream: TextIO | None = None,
) -> None:
    """Does: Print `msg` tagged with its topic when that topic is enabled."""
    if not is_topic_enabled(topic):
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(
        f"[{ts}] [{topic.strip().lower()}][{level.upper()}] {msg}",
        file=stream if stream is not None else sys.stderr,
    )
