# rig_correspondence/resolution/general/token/normalize.py
# ──────────────────────────────────────────────────────────────
# Shared utilities for node-name normalization and analysis
# ──────────────────────────────────────────────────────────────
"""
normalize.

Does: Deterministic node-name normalization (Unicode hygiene, lowercasing,
      punctuation stripping, zero-padded numeric indices), subject-prefix
      extraction with side-aware singularization, and "pure name" reduction.
Returns: normalize_name(), normalize_numbers(), extract_numbers(),
         subject_prefix(), pure_name(), singularize().
Used by: Fuzzy prefix/path scoring and the material-name cleaner.
"""

from __future__ import annotations

import re
import unicodedata

__all__ = [
    "normalize_name",
    "normalize_numbers",
    "extract_numbers",
    "singularize",
    "subject_prefix",
    "pure_name",
]

# Trailing descriptor words removed before prefix comparison
DESCRIPTORS: tuple[str, ...] = ("root", "base")
NUMBER_PAD = 3

_NUMBER_RE = re.compile(r"\d+")
_NON_WORD_RE = re.compile(r"[\W_]+", re.UNICODE)
# side letter at the end, optionally followed by an index or descriptors
_PREFIX_SIDE_RE = {
    "l": re.compile(r"l(\d+|(?:root|base)*)$"),
    "r": re.compile(r"r(\d+|(?:root|base)*)$"),
}
_TRAILING_SIDE_RE = re.compile(r"[lr]$")
_SIDE_WORDS: tuple[str, ...] = ("left", "right")

# Common “fancy” Unicode punctuation seen in exported rigs
_FANCY_HYPHENS = {"‐", "‑", "‒", "–", "—", "−"}


# ──────────────────────────────────────────────────────────────
# 0) Light Unicode hygiene
# ──────────────────────────────────────────────────────────────


def _unicode_hygiene(s: str) -> str:
    """
    Does: NFKC fold (full-width digits/letters → ASCII) and map fancy hyphens to '-'.
    Returns: Cleaned string (best-effort).
    """
    if not isinstance(s, str):
        return ""
    s = unicodedata.normalize("NFKC", s)
    for ch in _FANCY_HYPHENS:
        s = s.replace(ch, "-")
    return s


# ──────────────────────────────────────────────────────────────
# 1) NUMBERS
# ──────────────────────────────────────────────────────────────


def normalize_numbers(text: str) -> str:
    """
    Does: Zero-pad every run of digits to 3 places ("1" → "001", "12" → "012");
          runs above 999 are kept as-is.
    Returns: Text with padded numbers.
    """
    if not text:
        return text or ""

    def _pad(m: re.Match[str]) -> str:
        value = int(m.group(0))
        return f"{value:0{NUMBER_PAD}d}" if value <= 999 else m.group(0)

    return _NUMBER_RE.sub(_pad, text)


def extract_numbers(text: str) -> list[int]:
    """
    Does: Integer values of every digit run in `text`, in order. A run made of
          several padded indices ("001002" from "Hair.1.2") is split back into them.
    """
    if not text:
        return []
    values: list[int] = []
    for run in _NUMBER_RE.findall(text):
        if len(run) > NUMBER_PAD and len(run) % NUMBER_PAD == 0:
            values.extend(int(run[i:i + NUMBER_PAD]) for i in range(0, len(run), NUMBER_PAD))
        else:
            values.append(int(run))
    return values


# ──────────────────────────────────────────────────────────────
# 2) NORMALIZATION
# ──────────────────────────────────────────────────────────────


def normalize_name(name: str) -> str:
    """
    Does: Normalize a node name:
          - Unicode hygiene (NFKC; fancy hyphens)
          - lowercase
          - zero-pad numeric indices while delimiters still separate them
          - drop every non-alphanumeric char ('_', '.', '-', spaces, brackets…)
    Returns: Normalized name, e.g. "Breast_L.1" → "breastl001", "Hair.1.2" → "hair001002".
    """
    if not isinstance(name, str):
        return ""
    s = normalize_numbers(_unicode_hygiene(name).lower())
    return _NON_WORD_RE.sub("", s)


# ──────────────────────────────────────────────────────────────
# 3) SINGULARIZATION + SUBJECT PREFIX
# ──────────────────────────────────────────────────────────────


def singularize(word: str) -> str:
    """
    Does: Drop one trailing 's' from words longer than 3 chars, unless the word
          ends with 'ss' ("breasts" → "breast", "hips" → "hip", "gloss" stays).
    Returns: Singularized word.
    """
    if len(word) > 3 and word.endswith("s") and word[-2] != "s":
        return word[:-1]
    return word


def subject_prefix(normalized: str) -> str:
    """
    Does: Reduce a normalized name to its subject prefix:
          1) remove descriptor words ("root", "base")
          2) if a side letter (optionally indexed) ends the name, singularize
             the part before it and re-attach the marker ("breastsl" → "breastl")
          3) otherwise singularize the whole name
          Prefixes shorter than 2 chars fall back to the normalized input.
    Returns: Subject prefix string.
    """
    if not normalized:
        return ""

    result = normalized
    for descriptor in DESCRIPTORS:
        result = result.replace(descriptor, "")

    side_match = None
    for marker in ("l", "r"):
        side_match = _PREFIX_SIDE_RE[marker].search(result)
        if side_match:
            break

    if side_match:
        before = singularize(result[: side_match.start()])
        result = before + result[side_match.start():]
    else:
        result = singularize(result)

    if len(result) < 2:
        return normalized
    return result


def pure_name(prefix: str) -> str:
    """
    Does: Strip all digits, then the trailing side letter, then a leading
          "left"/"right" from a subject prefix ("leftarml002" → "arm").
          Results shorter than 2 chars fall back to the prefix itself.
    Returns: Pure subject name.
    """
    if not prefix:
        return ""
    pure = _NUMBER_RE.sub("", prefix)
    pure = _TRAILING_SIDE_RE.sub("", pure)
    for word in _SIDE_WORDS:
        if pure.startswith(word):
            pure = pure[len(word):]
            break
    if len(pure) < 2:
        return prefix
    return pure
