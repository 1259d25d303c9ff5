"""
Channel name similarity

Normalization and scoring used to compare playlist names with EPG display names.
"""
import re

from rapidfuzz.distance import Levenshtein


CONTAINMENT_SCORE = 0.8

_NON_ALNUM = re.compile(r'[^a-z0-9]')


def normalize_name(name: str) -> str:
    """
    Reduce a display name to lowercase ASCII letters and digits

    Every other character is deleted, not replaced, so "BFM TV" and
    "bfm-tv" both become "bfmtv".

    Args:
        name: Display name as authored

    Returns:
        Comparison form of the name (possibly empty)
    """
    return _NON_ALNUM.sub('', name.lower())


def edit_distance(first: str, second: str) -> int:
    """
    Levenshtein distance with unit costs

    Args:
        first: First string
        second: Second string

    Returns:
        Minimum number of insertions, deletions and substitutions
    """
    return Levenshtein.distance(first, second)


def score_similarity(first: str, second: str) -> float:
    """
    Score how alike two channel names are

    Rules, first match wins:
      1. identical after normalization -> 1.0
      2. one normalized form contains the other -> 0.8
      3. (len(longer) - edit_distance) / len(longer)

    The last rule is not clamped; callers filter with a threshold.

    Args:
        first: Playlist or EPG display name
        second: Playlist or EPG display name

    Returns:
        Similarity score, 1.0 for a perfect match
    """
    norm_a = normalize_name(first)
    norm_b = normalize_name(second)

    if norm_a == norm_b:
        return 1.0

    # An empty form is a substring of everything; it must not score as contained
    if norm_a and norm_b and (norm_a in norm_b or norm_b in norm_a):
        return CONTAINMENT_SCORE

    longer, shorter = (norm_a, norm_b) if len(norm_a) >= len(norm_b) else (norm_b, norm_a)
    if not longer:
        return 1.0

    distance = edit_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)
