"""Ingredient name normalization and identifier generation."""

import re
import unicodedata

# Vietnamese vowels with tone or vowel marks, and the stroked d, mapped to
# their base Latin letter. Keys are NFC-composed lowercase characters.
DIACRITIC_MAP = {
    "a": "àáạảãâầấậẩẫăằắặẳẵ",
    "e": "èéẹẻẽêềếệểễ",
    "i": "ìíịỉĩ",
    "o": "òóọỏõôồốộổỗơờớợởỡ",
    "u": "ùúụủũưừứựửữ",
    "y": "ỳýỵỷỹ",
    "d": "đ",
}

# Create reverse mapping for str.translate
DIACRITIC_TRANSLATION = str.maketrans(
    {
        char: base
        for base, chars in DIACRITIC_MAP.items()
        for char in unicodedata.normalize("NFC", chars)
    }
)

_INVALID_ID_CHARS = re.compile(r"[^a-z0-9-]")


def normalize(text: str) -> str:
    """Normalize an ingredient name into its comparable form.

    Lowercases, collapses runs of whitespace to one space, trims, and
    applies Unicode NFC composition so that differently decomposed but
    identical-looking strings compare equal. Never raises.

    Args:
        text: Raw ingredient name.

    Returns:
        The normalized name, or an empty string for empty input.

    Examples:
        >>> normalize("  THỊT   BÒ ")
        "thịt bò"
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    text = " ".join(text.lower().split())
    return unicodedata.normalize("NFC", text)


def generate_id(text: str) -> str:
    """Generate a stable, URL-safe identifier from an ingredient name.

    The name is normalized, spaces become hyphens, Vietnamese diacritics are
    folded to their base letter and anything outside ``[a-z0-9-]`` is
    dropped.

    Args:
        text: Raw or normalized ingredient name.

    Returns:
        Identifier matching ``^[a-z0-9-]*$``.

    Examples:
        >>> generate_id("THỊT BÒ")
        "thit-bo"
        >>> generate_id("cà chua (500g)")
        "ca-chua-500g"
    """
    slug = normalize(text).replace(" ", "-")
    slug = slug.translate(DIACRITIC_TRANSLATION)
    return _INVALID_ID_CHARS.sub("", slug)


def strip_diacritics(text: str) -> str:
    """Remove all combining marks for accent-insensitive comparison.

    Unlike generate_id this keeps spaces and punctuation and folds every
    combining mark, not only the Vietnamese ones.

    Examples:
        >>> strip_diacritics("Hành Tây")
        "hanh tay"
    """
    decomposed = unicodedata.normalize("NFD", normalize(text))
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.replace("đ", "d")


def compare_diacritic_insensitive(first: str, second: str) -> bool:
    """Compare two names ignoring case, spacing and diacritics."""
    return strip_diacritics(first) == strip_diacritics(second)
