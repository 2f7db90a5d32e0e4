"""Ingredient normalization, deduplication and categorization utilities."""

from .categorization import CATEGORIES, DEFAULT_CATEGORY_KEYWORDS, categorize
from .models import (
    ExtractedIngredient,
    ExtractionResult,
    MasterIngredient,
    SaveResult,
    SimilarIngredient,
)
from .normalization import (
    compare_diacritic_insensitive,
    generate_id,
    normalize,
    strip_diacritics,
)
from .parsing import extract_ingredient_name
from .rationalization import DEDUP_THRESHOLD, IngredientNormalizer
from .similarity import levenshtein_distance, rank_similar, similarity

__all__ = [
    "CATEGORIES",
    "DEDUP_THRESHOLD",
    "DEFAULT_CATEGORY_KEYWORDS",
    "ExtractedIngredient",
    "ExtractionResult",
    "IngredientNormalizer",
    "MasterIngredient",
    "SaveResult",
    "SimilarIngredient",
    "categorize",
    "compare_diacritic_insensitive",
    "extract_ingredient_name",
    "generate_id",
    "levenshtein_distance",
    "normalize",
    "rank_similar",
    "similarity",
    "strip_diacritics",
]
