"""Extraction of ingredient names from recipe ingredient lines."""

import re

from smart_cooking.ingredients.models import ExtractedIngredient

# --- Constants ---

# Metric, imperial and common Vietnamese kitchen units
UNITS = [
    "g", "kg", "gram", "kilogram", "ml", "l", "lít",
    "củ", "quả", "trái", "cây", "nhánh", "lá", "bó",
    "thìa", "muỗng", "chén", "bát", "ly",
    "chút", "ít", "tí", "tẹo", "miếng", "lát", "khoanh",
    "tbsp", "tsp", "cup", "oz", "lb",
]

# Longest units first so "kg" is not read as "k" + "g" and "lá" not as "l"
_UNIT_PATTERN = "|".join(re.escape(u) for u in sorted(UNITS, key=len, reverse=True))

QUANTITY_UNIT_RE = re.compile(
    rf"^([\d.,/]+)\s*(?:({_UNIT_PATTERN})(?![^\W\d_]))?\s*(.+)$", re.IGNORECASE
)

# --- Functions ---


def extract_ingredient_name(text: str) -> ExtractedIngredient:
    """Split a recipe ingredient line into quantity, unit and ingredient name.

    Args:
        text: Raw ingredient line (e.g., "300g thịt gà" or "2 củ cà rốt").

    Returns:
        ExtractedIngredient with the leading quantity and unit removed from
        the name. Lines without a leading quantity are returned as-is.

    Examples:
        >>> extract_ingredient_name("300g thịt gà")
        ExtractedIngredient(original="300g thịt gà", name="thịt gà", quantity="300", unit="g")
        >>> extract_ingredient_name("muối")
        ExtractedIngredient(original="muối", name="muối", quantity=None, unit=None)
    """
    original = (text or "").strip()

    match = QUANTITY_UNIT_RE.match(original)
    if match:
        quantity, unit, name = match.groups()
        return ExtractedIngredient(
            original=original,
            name=name.strip(),
            quantity=quantity,
            unit=unit.lower() if unit else None,
        )

    return ExtractedIngredient(original=original, name=original)
