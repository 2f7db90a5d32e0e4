"""Smart Cooking - Ingredient vocabulary and caching for the recipe network."""

__version__ = "0.1.0"

from . import config, database, exceptions, ingredients

__all__ = ["config", "database", "exceptions", "ingredients"]
