"""Edit-distance similarity and substring occurrence helpers."""

from __future__ import annotations


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def calculate_similarity(s1: str, s2: str) -> float:
    """Normalized edit-distance similarity (0.0 to 1.0)."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    distance = levenshtein_distance(s1, s2)
    return 1.0 - (distance / max_len)


def find_occurrences(text: str, pattern: str) -> list[tuple[int, int]]:
    """
    Find every occurrence of ``pattern`` in ``text``, overlapping ones included.

    Returns:
        List of (start, end) offsets in ascending order
    """
    if not pattern:
        return []

    spans: list[tuple[int, int]] = []
    start = text.find(pattern)
    while start != -1:
        spans.append((start, start + len(pattern)))
        start = text.find(pattern, start + 1)
    return spans
