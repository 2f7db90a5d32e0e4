"""Keyword-based ingredient categorization."""

from typing import Iterable, List, Sequence, Tuple

from smart_cooking.ingredients.normalization import normalize

DEFAULT_CATEGORY = "other"

# Ordered (category, keywords) pairs. The first category with a keyword
# contained in the normalized name wins, so more specific categories must
# come before broader ones.
DEFAULT_CATEGORY_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("protein", ["thịt", "gà", "heo", "bò", "vịt", "cá", "tôm", "mực", "trứng", "đậu hũ"]),
    ("vegetable", ["rau", "cải", "cà", "củ", "khoai", "bí", "đậu", "măng", "nấm"]),
    ("spice", ["muối", "đường", "tiêu", "ớt", "tỏi", "hành", "gừng", "sả"]),
    ("condiment", ["nước mắm", "dầu", "tương", "giấm", "dầu hào"]),
    ("herb", ["húng", "ngò", "rau thơm", "lá", "kinh giới"]),
    ("carb", ["gạo", "bún", "phở", "miến", "bánh"]),
    ("dairy", ["sữa", "bơ", "phô mai"]),
]

CATEGORIES = tuple(category for category, _ in DEFAULT_CATEGORY_KEYWORDS) + (
    DEFAULT_CATEGORY,
)


def categorize(
    text: str,
    category_keywords: Sequence[Tuple[str, Iterable[str]]] = DEFAULT_CATEGORY_KEYWORDS,
) -> str:
    """Assign a coarse category to an ingredient name.

    This is a best-effort heuristic: a wrong category is not an error.

    Args:
        text: Raw ingredient name.
        category_keywords: Ordered ``(category, keywords)`` pairs to match
            against. Keywords are normalized before matching.

    Returns:
        The first matching category, or ``"other"``.

    Examples:
        >>> categorize("Thịt bò")
        "protein"
        >>> categorize("rau muống")
        "vegetable"
    """
    name = normalize(text)
    if not name:
        return DEFAULT_CATEGORY

    for category, keywords in category_keywords:
        for keyword in keywords:
            keyword = normalize(keyword)
            if keyword and keyword in name:
                return category
    return DEFAULT_CATEGORY
