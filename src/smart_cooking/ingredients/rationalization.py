import datetime
import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from boto3.dynamodb.conditions import Key

from smart_cooking.database.schema import (
    INGREDIENT_INDEX_NAME,
    INGREDIENT_INDEX_PARTITION,
    INGREDIENT_INDEX_PK,
    PK,
    SK,
    ingredient_key,
    master_ingredient_item,
)
from smart_cooking.database.utils import DynamoDBHelper
from smart_cooking.exceptions import IngredientStoreError
from smart_cooking.ingredients.categorization import (
    DEFAULT_CATEGORY_KEYWORDS,
    categorize,
)
from smart_cooking.ingredients.models import (
    ExtractionResult,
    MasterIngredient,
    SaveResult,
    SimilarIngredient,
)
from smart_cooking.ingredients.normalization import generate_id, normalize
from smart_cooking.ingredients.parsing import extract_ingredient_name
from smart_cooking.ingredients.similarity import rank_similar

logger = logging.getLogger(__name__)

# Names scoring at or above this are treated as the same ingredient
DEDUP_THRESHOLD = 0.90

# Maximum master ingredients read from the index per similarity search
SIMILARITY_SCAN_LIMIT = 100

INCREMENT_USAGE_EXPRESSION = (
    "ADD usage_count :inc SET last_used_in = :source, updated_at = :now"
)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class IngredientNormalizer:
    """Maintains the master ingredient vocabulary in DynamoDB.

    Raw ingredient names coming from user recipes are resolved to a master
    ingredient id, reusing an existing entry when the name matches one
    exactly (same id) or nearly (similarity at or above the dedup
    threshold), and creating a new entry otherwise. Every accepted
    reference bumps the entry's usage counter.

    Two concurrent calls with near-duplicate names that are both new can
    still create two entries; no lock spans the lookup and the create.

    Usage increments are not retried after a read timeout or a dropped
    connection, since the ``ADD`` may already have been applied. Such a
    reference can go uncounted but is never counted twice.

    Attributes:
        store (DynamoDBHelper): Access to the single table holding the vocabulary.
        threshold (float): Minimum similarity for a near-duplicate match.
        scan_limit (int): Maximum number of index entries scanned per search.
        category_keywords: Ordered ``(category, keywords)`` table used for new entries.
        clock: Callable returning the current timezone-aware UTC time.
    """

    def __init__(
        self,
        store: DynamoDBHelper,
        threshold: float = DEDUP_THRESHOLD,
        scan_limit: int = SIMILARITY_SCAN_LIMIT,
        category_keywords: Sequence[
            Tuple[str, Iterable[str]]
        ] = DEFAULT_CATEGORY_KEYWORDS,
        clock: Callable[[], datetime.datetime] = _utcnow,
    ):
        self.store = store
        self.threshold = threshold
        self.scan_limit = scan_limit
        self.category_keywords = category_keywords
        self.clock = clock

    def get_ingredient(self, ingredient_id: str) -> Optional[MasterIngredient]:
        """Fetch a master ingredient by id.

        Raises:
            IngredientStoreError: If the table cannot be read.
        """
        key = ingredient_key(ingredient_id)
        item = self.store.get(key[PK], key[SK])
        return MasterIngredient.from_item(item) if item else None

    def find_similar(
        self, name: str, threshold: Optional[float] = None
    ) -> List[SimilarIngredient]:
        """Find master ingredients whose names are close to ``name``.

        Only the first ``scan_limit`` entries of the ingredient index are
        compared, so very large vocabularies are searched partially.

        Args:
            name (str): Raw or normalized ingredient name.
            threshold (float, optional): Minimum similarity. Defaults to the
                instance threshold.

        Returns:
            List[SimilarIngredient]: Matches sorted by descending score. Empty
                if nothing is close enough or the index cannot be queried.
        """
        normalized = normalize(name)
        if threshold is None:
            threshold = self.threshold

        try:
            result = self.store.query(
                IndexName=INGREDIENT_INDEX_NAME,
                KeyConditionExpression=Key(INGREDIENT_INDEX_PK).eq(
                    INGREDIENT_INDEX_PARTITION
                ),
                Limit=self.scan_limit,
            )
        except IngredientStoreError as e:
            logger.error(
                f"Error finding similar ingredients: {e}",
                extra={"ingredient_name": normalized},
            )
            return []

        candidates = [
            (item["ingredient_id"], item["name"])
            for item in result["Items"]
            if "ingredient_id" in item and "name" in item
        ]
        return rank_similar(normalized, candidates, threshold)

    def save_ingredient(self, raw_name: str, source_id: str) -> SaveResult:
        """Resolve ``raw_name`` to a master ingredient, creating it if needed.

        Resolution order:
            1. an entry whose id equals ``generate_id(raw_name)``;
            2. the best near-duplicate from find_similar;
            3. a new entry categorized from the name.

        Names without any id characters (empty, punctuation only or
        non-Latin script) all resolve to the empty id.

        Args:
            raw_name (str): Ingredient name as written in the source record.
            source_id (str): Id of the record (e.g. recipe) referencing it.

        Returns:
            SaveResult: The resolved id and whether a new entry was created.

        Raises:
            IngredientStoreError: If creating a new entry fails.
        """
        normalized = normalize(raw_name)
        ingredient_id = generate_id(normalized)
        try:
            key = ingredient_key(ingredient_id)
            existing = self.store.get(key[PK], key[SK])
        except IngredientStoreError as e:
            logger.error(
                f"Error looking up ingredient {ingredient_id}: {e}",
                extra={"ingredient_id": ingredient_id},
            )
            existing = None

        if existing:
            self._increment_usage(ingredient_id, source_id)
            logger.info(
                "Using existing ingredient",
                extra={"ingredient_id": ingredient_id, "ingredient_name": normalized},
            )
            return SaveResult(ingredient_id, is_new=False)

        similar = self.find_similar(normalized, self.threshold)
        if similar:
            match = similar[0]
            logger.info(
                "Found similar ingredient, using existing",
                extra={
                    "input_name": raw_name,
                    "matched_name": match.name,
                    "similarity": match.score,
                },
            )
            self._increment_usage(match.id, source_id)
            return SaveResult(match.id, is_new=False)

        category = categorize(normalized, self.category_keywords)
        now = self.clock().isoformat()
        self.store.put(
            master_ingredient_item(ingredient_id, normalized, category, source_id, now)
        )
        logger.info(
            "New ingredient created",
            extra={
                "ingredient_id": ingredient_id,
                "ingredient_name": normalized,
                "category": category,
                "source_id": source_id,
            },
        )
        return SaveResult(ingredient_id, is_new=True)

    def _increment_usage(self, ingredient_id: str, source_id: str) -> None:
        """Atomically add one reference to an entry. Failures are only logged."""
        key = ingredient_key(ingredient_id)
        try:
            self.store.update(
                key[PK],
                key[SK],
                INCREMENT_USAGE_EXPRESSION,
                {
                    ":inc": 1,
                    ":source": source_id,
                    ":now": self.clock().isoformat(),
                },
                condition="attribute_exists(PK)",
            )
        except IngredientStoreError as e:
            logger.error(
                f"Failed to increment usage for {ingredient_id}: {e}",
                extra={"ingredient_id": ingredient_id},
            )
            return

        logger.debug(
            "Incremented ingredient usage",
            extra={"ingredient_id": ingredient_id, "source_id": source_id},
        )

    def save_recipe_ingredients(
        self, lines: Iterable[str], source_id: str
    ) -> ExtractionResult:
        """Extract names from recipe ingredient lines and save each one.

        A line whose ingredient cannot be saved is logged and counted in
        ``failed``; the remaining lines are still processed.

        Args:
            lines: Ingredient lines such as "300g thịt gà".
            source_id: Id of the recipe the lines belong to.

        Returns:
            ExtractionResult with the parsed lines and per-outcome counts.
        """
        result = ExtractionResult()
        for line in lines:
            extracted = extract_ingredient_name(line)
            if not extracted.name:
                continue
            result.extracted.append(extracted)

            try:
                saved = self.save_ingredient(extracted.name, source_id)
            except IngredientStoreError as e:
                result.failed += 1
                logger.error(
                    f"Error saving ingredient {extracted.name!r}: {e}",
                    extra={"source_id": source_id},
                )
                continue

            if saved.is_new:
                result.saved_to_master += 1
            else:
                result.already_exists += 1

        logger.info(
            "Saved recipe ingredients",
            extra={
                "source_id": source_id,
                "saved_to_master": result.saved_to_master,
                "already_exists": result.already_exists,
                "failed": result.failed,
            },
        )
        return result
