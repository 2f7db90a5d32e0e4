"""DynamoDB access helpers for the smart-cooking single table."""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from smart_cooking.config import Settings
from smart_cooking.database.retry import retry_on_transient_error
from smart_cooking.database.schema import PK, SK
from smart_cooking.exceptions import IngredientStoreError

logger = logging.getLogger(__name__)


def get_table(settings: Settings):
    """Get a boto3 Table resource configured from ``settings``.

    Client-side retries are disabled since DynamoDBHelper retries
    transient errors itself.

    Args:
        settings: Connection settings

    Returns:
        boto3 DynamoDB Table resource
    """
    config = Config(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )
    resource = boto3.resource(
        "dynamodb",
        region_name=settings.region_name,
        endpoint_url=settings.endpoint_url,
        config=config,
    )
    return resource.Table(settings.table_name)


def to_dynamo(value: Any) -> Any:
    """Convert floats (including nested ones) to Decimal for DynamoDB."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value: Any) -> Any:
    """Convert Decimals returned by DynamoDB back to int or float."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


class DynamoDBHelper:
    """Point reads, writes and index queries against one DynamoDB table.

    Transient errors (throttling, 5xx, dropped connections) are retried with
    exponential backoff. Anything still failing is raised as
    IngredientStoreError so callers only need to handle one exception type.

    Attributes:
        table: boto3 Table resource (or any object with the same methods).
    """

    def __init__(self, table, max_retries: int = 3, retry_delay: float = 0.05):
        self.table = table
        self._call = retry_on_transient_error(max_retries, retry_delay)(
            self._call_table
        )
        # For non-idempotent writes such as ADD
        self._call_write = retry_on_transient_error(
            max_retries, retry_delay, retry_ambiguous=False
        )(self._call_table)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoDBHelper":
        return cls(get_table(settings), max_retries=settings.max_retries)

    def _call_table(self, method: str, **kwargs: Any) -> Dict[str, Any]:
        return getattr(self.table, method)(**kwargs)

    def _execute(
        self, method: str, idempotent: bool = True, **kwargs: Any
    ) -> Dict[str, Any]:
        call = self._call if idempotent else self._call_write
        try:
            return call(method, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            raise IngredientStoreError(method, str(e), code) from e
        except BotoCoreError as e:
            raise IngredientStoreError(method, str(e)) from e

    def get(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        """Fetch one item by primary key, or None if it does not exist."""
        response = self._execute("get_item", Key={PK: pk, SK: sk})
        item = response.get("Item")
        return from_dynamo(item) if item is not None else None

    def put(self, item: Dict[str, Any]) -> None:
        """Write ``item``, replacing any item with the same key."""
        self._execute("put_item", Item=to_dynamo(item))

    def update(
        self,
        pk: str,
        sk: str,
        update_expression: str,
        values: Dict[str, Any],
        names: Optional[Dict[str, str]] = None,
        condition: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Apply an update expression atomically and return the new item.

        A ``condition`` makes the update fail with IngredientStoreError
        (code ConditionalCheckFailedException) instead of writing when the
        item does not satisfy it.

        Throttling is retried, but a read timeout, dropped connection or
        InternalServerError is raised at once since the update may already
        have been applied.

        Example:
            helper.update(
                "INGREDIENT#toi", "METADATA",
                "ADD usage_count :inc SET updated_at = :now",
                {":inc": 1, ":now": "2024-01-01T00:00:00+00:00"},
            )
        """
        kwargs = {
            "Key": {PK: pk, SK: sk},
            "UpdateExpression": update_expression,
            "ExpressionAttributeValues": to_dynamo(values),
            "ReturnValues": "ALL_NEW",
        }
        if names:
            kwargs["ExpressionAttributeNames"] = names
        if condition:
            kwargs["ConditionExpression"] = condition
        response = self._execute("update_item", idempotent=False, **kwargs)
        return from_dynamo(response.get("Attributes", {}))

    def delete(self, pk: str, sk: str) -> None:
        self._execute("delete_item", Key={PK: pk, SK: sk})

    def query(self, **kwargs: Any) -> Dict[str, Any]:
        """Run a Query and return ``Items`` (converted), ``Count`` and paging key.

        Keyword arguments are passed straight to ``Table.query``, e.g.
        ``IndexName``, ``KeyConditionExpression`` and ``Limit``.
        """
        response = self._execute("query", **kwargs)
        items = [from_dynamo(item) for item in response.get("Items", [])]
        result = {"Items": items, "Count": response.get("Count", len(items))}
        if "LastEvaluatedKey" in response:
            result["LastEvaluatedKey"] = response["LastEvaluatedKey"]
        return result
