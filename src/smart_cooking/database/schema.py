"""Single-table key layout for the smart-cooking DynamoDB table.

Every entity lives in one table keyed by ``PK``/``SK``. Secondary lookups go
through global secondary indexes whose key attributes are written onto the
items that should appear in them.
"""

from typing import Any, Dict

PK = "PK"
SK = "SK"

# Master ingredient vocabulary
INGREDIENT_PK_PREFIX = "INGREDIENT#"
INGREDIENT_SK = "METADATA"
MASTER_INGREDIENT_ENTITY = "master_ingredient"

# GSI2 enumerates every master ingredient under one partition
INGREDIENT_INDEX_NAME = "GSI2"
INGREDIENT_INDEX_PK = "GSI2PK"
INGREDIENT_INDEX_SK = "GSI2SK"
INGREDIENT_INDEX_PARTITION = "INGREDIENTS"

# Cache entries
CACHE_PK_PREFIX = "CACHE#"
CACHE_SK = "DATA"


def ingredient_key(ingredient_id: str) -> Dict[str, str]:
    """Primary key of the master ingredient with the given id."""
    return {PK: f"{INGREDIENT_PK_PREFIX}{ingredient_id}", SK: INGREDIENT_SK}


def cache_key(key: str) -> Dict[str, str]:
    """Primary key of the cache entry stored under ``key``."""
    return {PK: f"{CACHE_PK_PREFIX}{key}", SK: CACHE_SK}


def master_ingredient_item(
    ingredient_id: str,
    name: str,
    category: str,
    source_id: str,
    timestamp: str,
) -> Dict[str, Any]:
    """Build the item for a newly created master ingredient.

    The GSI2 attributes make the item visible to similarity scans.
    """
    return {
        **ingredient_key(ingredient_id),
        "entity_type": MASTER_INGREDIENT_ENTITY,
        "ingredient_id": ingredient_id,
        "name": name,
        "category": category,
        "usage_count": 1,
        "first_used_in": source_id,
        "last_used_in": source_id,
        "created_at": timestamp,
        "updated_at": timestamp,
        INGREDIENT_INDEX_PK: INGREDIENT_INDEX_PARTITION,
        INGREDIENT_INDEX_SK: name,
    }
