# rig_correspondence/resolution/general/token/side.py
"""
side.

Does: Detect left/right side markers on node names, either on the raw name
      ("Arm_L", "hand.r.001", "Left Leg", "LeftFoot") or on the normalized
      form produced by normalize_name() ("arml", "handr001", "breastlroot").
Returns: Side enum + detect_side() / effective_side() / sides_conflict().
Used by: Subject-prefix extraction, prefix similarity and the fuzzy side gate.
"""

from __future__ import annotations

import re
from enum import Enum

from .normalize import normalize_name

__all__ = [
    "Side",
    "detect_side",
    "effective_side",
    "sides_conflict",
]


class Side(str, Enum):
    NONE = ""
    LEFT = "l"
    RIGHT = "r"

    def __bool__(self) -> bool:
        return self is not Side.NONE


# ── Raw-name patterns ────────────────────────────────────────────────────────
# delimiter + single letter, followed by delimiter/digit or end: "_l", ".R.001", "-l"
_RAW_DELIMITED = {
    Side.LEFT: re.compile(r"[._\-\s]l(?:[._\-\s\d]|$)"),
    Side.RIGHT: re.compile(r"[._\-\s]r(?:[._\-\s\d]|$)"),
}
_RAW_WORD = {
    Side.LEFT: re.compile(r"\bleft\b"),
    Side.RIGHT: re.compile(r"\bright\b"),
}
# CamelCase prefixes, checked on the un-lowered name: "LeftUpperLeg", "Right_Hand"
_RAW_CAMEL = {
    Side.LEFT: re.compile(r"^left(?=[A-Z0-9._\-\s]|$)", re.IGNORECASE),
    Side.RIGHT: re.compile(r"^right(?=[A-Z0-9._\-\s]|$)", re.IGNORECASE),
}
_VOWELS = frozenset("aeiou")

# ── Normalized-name patterns ─────────────────────────────────────────────────
_NORM_NUMBERED = {
    Side.LEFT: re.compile(r"l\d+$"),
    Side.RIGHT: re.compile(r"r\d+$"),
}
_NORM_TRAILING = {
    Side.LEFT: re.compile(r"l(?:root|base)*$"),
    Side.RIGHT: re.compile(r"r(?:root|base)*$"),
}
# trailing marker with the letter before it: "upperarml001" -> ("m", "l")
_NORM_MARKER = re.compile(r"([a-z])([lr])(?:\d+|(?:root|base)*)$")


def _detect_normalized(text: str) -> Side:
    for side in (Side.LEFT, Side.RIGHT):
        if _NORM_NUMBERED[side].search(text):
            return side
    for side in (Side.LEFT, Side.RIGHT):
        if _NORM_TRAILING[side].search(text):
            return side
    return Side.NONE


def _camel_prefix(text: str) -> Side:
    """Left/Right prefix that is followed by an upper-case letter, digit or delimiter."""
    for side, pat in _RAW_CAMEL.items():
        m = pat.match(text)
        if not m:
            continue
        nxt = text[m.end():m.end() + 1]
        # re.IGNORECASE makes [A-Z] match lower-case too; re-check the case here
        if not nxt or not nxt.isalpha() or nxt.isupper():
            return side
    return Side.NONE


def _detect_raw(text: str) -> Side:
    lower = text.lower()
    for side in (Side.LEFT, Side.RIGHT):
        if _RAW_DELIMITED[side].search(lower):
            return side

    # bare trailing letter after a consonant: "ArmL", "HandR"
    if len(lower) > 1 and lower[-2] not in _VOWELS:
        if lower.endswith("l"):
            return Side.LEFT
        if lower.endswith("r"):
            return Side.RIGHT

    for side in (Side.LEFT, Side.RIGHT):
        if _RAW_WORD[side].search(lower):
            return side

    return _camel_prefix(text)


def detect_side(text: str, *, normalized: bool = False) -> Side:
    """
    Does: Detect the side marker of `text`.
          normalized=False → raw-name rules (delimiters, trailing consonant+l/r,
          left/right words, CamelCase prefix).
          normalized=True  → trailing l/r followed by digits or root/base.
    Returns: Side.LEFT / Side.RIGHT / Side.NONE.
    """
    if not text:
        return Side.NONE
    if normalized:
        return _detect_normalized(text.lower())
    return _detect_raw(text)


def effective_side(name: str) -> Side:
    """
    Does: Side of a raw node name, falling back to its normalized form when the
          raw rules see nothing ("UpperArmL1" -> "upperarml001" -> LEFT). The
          fallback keeps the consonant guard, so "Tail1" and "Hair" stay NONE.
    Returns: Side.LEFT / Side.RIGHT / Side.NONE.
    """
    raw = detect_side(name)
    if raw:
        return raw
    m = _NORM_MARKER.search(normalize_name(name))
    if m is None or m.group(1) in _VOWELS:
        return Side.NONE
    return Side(m.group(2))


def sides_conflict(a: str, b: str) -> bool:
    """True when both names carry a side marker (raw or normalized) and the markers differ."""
    side_a = effective_side(a)
    side_b = effective_side(b)
    return bool(side_a) and bool(side_b) and side_a != side_b
