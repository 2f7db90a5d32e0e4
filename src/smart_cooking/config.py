"""Environment-driven settings for the DynamoDB-backed services."""

import dataclasses
import os
from typing import Mapping, Optional

DEFAULT_TABLE_NAME = "smart-cooking-data-dev"
DEFAULT_REGION = "us-east-1"


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclasses.dataclass(frozen=True)
class Settings:
    """Connection and logging settings.

    Attributes:
        table_name: Name of the single DynamoDB table holding all entities.
        region_name: AWS region of the table.
        endpoint_url: Optional endpoint override, e.g. a local DynamoDB.
        connect_timeout: Seconds to wait for a connection to DynamoDB.
        read_timeout: Seconds to wait for a response from DynamoDB.
        max_retries: Attempts made on throttling and other transient errors.
        log_level: Name of the logging level used by scripts.
    """

    table_name: str = DEFAULT_TABLE_NAME
    region_name: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None
    connect_timeout: float = 2.0
    read_timeout: float = 5.0
    max_retries: int = 3
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Settings with every unset variable falling back to its default.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if env is None else env
        max_retries = env.get("DYNAMODB_MAX_RETRIES") or "3"
        if not max_retries.isdigit() or int(max_retries) < 1:
            raise ValueError(
                f"DYNAMODB_MAX_RETRIES must be a positive integer, got {max_retries!r}"
            )
        return cls(
            table_name=env.get("DYNAMODB_TABLE") or DEFAULT_TABLE_NAME,
            region_name=env.get("AWS_REGION") or DEFAULT_REGION,
            endpoint_url=env.get("DYNAMODB_ENDPOINT_URL") or None,
            connect_timeout=_float_env(env, "DYNAMODB_CONNECT_TIMEOUT", 2.0),
            read_timeout=_float_env(env, "DYNAMODB_READ_TIMEOUT", 5.0),
            max_retries=int(max_retries),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
