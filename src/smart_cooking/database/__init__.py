"""Database utilities for the smart-cooking DynamoDB table."""

from .cache import CACHE_TTL, DEFAULT_TTL_SECONDS, CacheService
from .retry import is_transient_error, retry_on_transient_error
from .schema import ingredient_key, master_ingredient_item
from .utils import DynamoDBHelper, from_dynamo, get_table, to_dynamo

__all__ = [
    "CACHE_TTL",
    "DEFAULT_TTL_SECONDS",
    "CacheService",
    "DynamoDBHelper",
    "from_dynamo",
    "get_table",
    "ingredient_key",
    "is_transient_error",
    "master_ingredient_item",
    "retry_on_transient_error",
    "to_dynamo",
]
