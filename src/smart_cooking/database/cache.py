"""Best-effort TTL cache stored in the smart-cooking DynamoDB table.

The cache fails open: any problem talking to the table is logged and
treated as a miss (``get``) or as a no-op (``set``/``delete``). Callers must
be correct without it.
"""

import datetime
import hashlib
import json
import logging
from typing import Any, Callable, Dict, Optional

from smart_cooking.database.schema import PK, SK, cache_key
from smart_cooking.database.utils import DynamoDBHelper

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60

# TTLs in seconds for the kinds of data cached across the application
CACHE_TTL = {
    "INGREDIENT_VALIDATION": 24 * 60 * 60,
    "AI_SUGGESTIONS": 60 * 60,
    "RECIPE_SEARCH": 30 * 60,
    "USER_PROFILE": 15 * 60,
    "MASTER_INGREDIENTS": 7 * 24 * 60 * 60,
}


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _sort_token(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def _canonical(value: Any, _seen: frozenset = frozenset()) -> Any:
    """Rewrite ``value`` so that json.dumps(sort_keys=True) is deterministic.

    Mapping keys become strings and sets become sorted lists. Containers met
    again inside themselves raise ValueError, as json.dumps does.
    """
    if not isinstance(value, (dict, list, tuple, set, frozenset)):
        return value
    if id(value) in _seen:
        raise ValueError("Circular reference detected")
    seen = _seen | {id(value)}

    if isinstance(value, dict):
        return {str(k): _canonical(v, seen) for k, v in value.items()}
    items = [_canonical(v, seen) for v in value]
    if isinstance(value, (set, frozenset)):
        items.sort(key=_sort_token)
    return items


class CacheService:
    """Key/value cache with per-entry expiry.

    Create one instance per process or request scope and pass it to the
    code that needs it.

    Attributes:
        store: DynamoDBHelper for the table holding cache entries.
        clock: Callable returning the current timezone-aware UTC time.
        hits: Number of ``get`` calls that returned a live entry.
        misses: Number of ``get`` calls that found nothing or an expired entry.
        errors: Number of store or serialization failures swallowed.
    """

    def __init__(
        self,
        store: DynamoDBHelper,
        clock: Callable[[], datetime.datetime] = _utcnow,
    ):
        self.store = store
        self.clock = clock
        self.hits = 0
        self.misses = 0
        self.errors = 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for ``key``, or None.

        None is returned for a missing entry, an expired entry and for any
        error while reading or decoding it.
        """
        try:
            item_key = cache_key(key)
            item = self.store.get(item_key[PK], item_key[SK])
            if item is None:
                self.misses += 1
                return None

            expires_at = datetime.datetime.fromisoformat(item["expires_at"])
            if self.clock() > expires_at:
                logger.debug("Cache entry expired", extra={"cache_key": key})
                self.misses += 1
                return None

            data = item.get("data")
            value = json.loads(data) if data is not None else None
        except Exception as e:
            self.errors += 1
            logger.error(
                f"Cache get failed for {key!r}: {e}", extra={"cache_key": key}
            )
            return None

        self.hits += 1
        return value

    def set(self, key: str, data: Any, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        """Store ``data`` under ``key`` for ``ttl_seconds``.

        Non-positive TTLs are written as-is and produce an entry that is
        already expired.
        """
        try:
            now = self.clock()
            expires_at = now + datetime.timedelta(seconds=ttl_seconds)
            self.store.put(
                {
                    **cache_key(key),
                    "data": json.dumps(data, ensure_ascii=False),
                    "expires_at": expires_at.isoformat(),
                    "ttl": int(expires_at.timestamp()),
                    "created_at": now.isoformat(),
                }
            )
        except Exception as e:
            self.errors += 1
            logger.error(
                f"Cache set failed for {key!r}: {e}", extra={"cache_key": key}
            )
            return

        logger.debug("Cache set", extra={"cache_key": key, "ttl": ttl_seconds})

    def delete(self, key: str) -> None:
        """Remove ``key`` from the cache. Missing keys are not an error."""
        try:
            item_key = cache_key(key)
            self.store.delete(item_key[PK], item_key[SK])
        except Exception as e:
            self.errors += 1
            logger.error(
                f"Cache delete failed for {key!r}: {e}", extra={"cache_key": key}
            )

    def generate_key(self, prefix: str, params: Dict[str, Any]) -> str:
        """Build a deterministic cache key from a prefix and parameters.

        Keys are stringified and sorted at every nesting level and sets are
        sorted before hashing, so neither the insertion order of ``params``
        nor set iteration order affects the key.

        Raises:
            ValueError: If ``params`` contains a circular reference.

        Examples:
            >>> cache.generate_key("p", {"a": 1, "b": 2}) == cache.generate_key("p", {"b": 2, "a": 1})
            True
        """
        serialized = json.dumps(_canonical(params), sort_keys=True, default=str)
        digest = hashlib.md5(serialized.encode("utf-8")).hexdigest()
        return f"{prefix}:{digest}"

    def get_stats(self) -> Dict[str, Any]:
        """Return hit, miss and error counters for this instance."""
        lookups = self.hits + self.misses
        return {
            "hits": self.hits,
            "misses": self.misses,
            "errors": self.errors,
            "hit_rate": self.hits / lookups if lookups else 0.0,
        }
