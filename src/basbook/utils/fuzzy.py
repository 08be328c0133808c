"""Business-name normalization and edit-distance similarity."""

import re
from typing import Sequence

from rapidfuzz.distance import Levenshtein

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")

# Legal-entity suffixes and country markers dropped from vendor names.
# "pty ltd" must run before the bare "ltd" pattern.
PROVIDER_SUFFIXES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bpty\s*ltd\b"),
    re.compile(r"\binc\b"),
    re.compile(r"\bllc\b"),
    re.compile(r"\bltd\b"),
    re.compile(r"\baustralia\b"),
    re.compile(r"\bau\b"),
)

# Client legal names vary more, so corporation/company forms are dropped too.
CLIENT_SUFFIXES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bpty\s*ltd\b"),
    re.compile(r"\binc\b"),
    re.compile(r"\bllc\b"),
    re.compile(r"\bltd\b"),
    re.compile(r"\bcorporation\b"),
    re.compile(r"\bcorp\b"),
    re.compile(r"\bcompany\b"),
    re.compile(r"\bco\b"),
    re.compile(r"\baustralia\b"),
    re.compile(r"\bau\b"),
)


def normalize_name(value: str, suffixes: Sequence[re.Pattern[str]]) -> str:
    """Normalize a business name for comparison.

    Lowercases, drops punctuation, removes the given suffix words and collapses
    whitespace. Punctuation goes first so that "Pty. Ltd." and "A.U." are seen
    as the words they spell, which keeps the result idempotent.

    Args:
        value: Raw name
        suffixes: Compiled word patterns to remove

    Returns:
        Normalized name (possibly empty)
    """
    normalized = _NON_ALPHANUMERIC.sub("", value.casefold())
    for pattern in suffixes:
        normalized = pattern.sub(" ", normalized)
    return _WHITESPACE.sub(" ", normalized).strip()


def normalize_provider_name(value: str) -> str:
    """Normalize a vendor/provider name."""
    return normalize_name(value, PROVIDER_SUFFIXES)


def normalize_client_name(value: str) -> str:
    """Normalize a client name."""
    return normalize_name(value, CLIENT_SUFFIXES)


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance; insertion, deletion and substitution cost 1."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1] derived from Levenshtein distance.

    0.0 when either side is empty (including both), 1.0 for equal strings,
    otherwise ``1 - distance / max(len(a), len(b))``. Callers pass normalized
    names.
    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    distance = levenshtein_distance(a, b)
    return 1 - distance / max(len(a), len(b))
