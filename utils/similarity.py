"""
String similarity for header matching.

Edit-distance based score in [0, 1] between two normalized tokens.
"""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance (unit cost insert/delete/substitute)."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Similarity of two strings.

    (max_len - edit_distance) / max_len, where max_len is the length of
    the longer string. Two empty strings are identical (1.0).

    Examples:
        similarity("marque", "marque") → 1.0
        similarity("serie", "serial") → 0.666...
        similarity("", "") → 1.0
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - edit_distance(a, b)) / max_len
