"""Retry decorators for handling transient DynamoDB errors."""

import logging
import time
from functools import wraps
from typing import Any, Callable

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

logger = logging.getLogger(__name__)

# Error codes DynamoDB returns for conditions that clear up on their own
TRANSIENT_ERROR_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
}

TRANSIENT_CONNECTION_ERRORS = (
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

# Failures after which a write may or may not have been applied
AMBIGUOUS_ERROR_CODES = {"InternalServerError"}

AMBIGUOUS_CONNECTION_ERRORS = (ConnectionClosedError, ReadTimeoutError)


def is_ambiguous_error(error: BaseException) -> bool:
    """Return True if the request may have reached the table before ``error``."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code") in AMBIGUOUS_ERROR_CODES
    return isinstance(error, AMBIGUOUS_CONNECTION_ERRORS)


def is_transient_error(error: BaseException, include_ambiguous: bool = True) -> bool:
    """Return True if ``error`` is worth retrying.

    With ``include_ambiguous=False`` errors that leave the outcome of the
    request unknown are not retried.
    """
    if not include_ambiguous and is_ambiguous_error(error):
        return False
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code") in TRANSIENT_ERROR_CODES
    return isinstance(error, TRANSIENT_CONNECTION_ERRORS)


def retry_on_transient_error(
    max_retries: int = 3, initial_delay: float = 0.05, retry_ambiguous: bool = True
) -> Callable:
    """Decorator that retries a function on transient errors with exponential backoff.

    Args:
        max_retries: Maximum number of attempts
        initial_delay: Initial delay between retries in seconds
        retry_ambiguous: Also retry errors after which the call may already
            have taken effect. Disable for non-idempotent writes.

    Returns:
        Decorated function that retries on throttling and connection errors

    Example:
        @retry_on_transient_error(max_retries=3, initial_delay=0.1)
        def fetch_item(table, key):
            return table.get_item(Key=key)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except (ClientError, *TRANSIENT_CONNECTION_ERRORS) as e:
                    if not is_transient_error(e, retry_ambiguous):
                        raise
                    if attempt < max_retries - 1:
                        logger.warning(
                            f"Transient error on attempt {attempt + 1}/{max_retries}: {e}. "
                            f"Retrying in {delay}s..."
                        )
                        time.sleep(delay)
                        delay *= 2  # Exponential backoff
                    else:
                        logger.error(f"Failed after {max_retries} attempts: {e}")
                        raise
            return None

        return wrapper

    return decorator
