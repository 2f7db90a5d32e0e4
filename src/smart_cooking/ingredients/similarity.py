"""Edit-distance similarity between normalized ingredient names."""

from typing import Iterable, List, Tuple

from smart_cooking.ingredients.models import SimilarIngredient


def levenshtein_distance(first: str, second: str) -> int:
    """Classic Levenshtein distance with unit-cost insert, delete and substitute."""
    if len(first) < len(second):
        first, second = second, first
    if not second:
        return len(first)

    previous = list(range(len(second) + 1))
    for i, a in enumerate(first, start=1):
        current = [i]
        for j, b in enumerate(second, start=1):
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + (a != b),  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(first: str, second: str) -> float:
    """Similarity in [0, 1]: one minus the edit distance over the longer length.

    Two empty strings are identical and score 1.0.

    Examples:
        >>> similarity("hành tây", "hành tây")
        1.0
        >>> similarity("abc", "abd")
        0.6666666666666667
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(first, second) / longest


def rank_similar(
    name: str, candidates: Iterable[Tuple[str, str]], threshold: float
) -> List[SimilarIngredient]:
    """Score ``(id, name)`` candidates against ``name`` and keep those at or above threshold.

    Returns:
        Matches sorted by descending score. Equal scores keep candidate order.
    """
    matches = []
    for candidate_id, candidate_name in candidates:
        score = similarity(name, candidate_name)
        if score >= threshold:
            matches.append(SimilarIngredient(candidate_id, candidate_name, score))
    matches.sort(key=lambda m: m.score, reverse=True)
    return matches
