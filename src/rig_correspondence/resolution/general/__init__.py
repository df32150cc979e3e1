"""
general.
=======

Shared general-purpose modules used across the resolution stack
(token normalization, fuzzy scoring, config and trace utilities).

Exports:
- Named: Protocol for anything carrying a name (materials).
"""

from .types import Named

__all__ = ["Named"]
