"""Exception types raised by smart_cooking."""


class SmartCookingError(Exception):
    """Base class for errors raised by this package."""


class IngredientStoreError(SmartCookingError):
    """A request to the backing DynamoDB table failed.

    Attributes:
        operation: Name of the table operation that failed (get, put, ...).
        code: AWS error code when the failure came from the service, else None.
    """

    def __init__(self, operation: str, message: str, code: str = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.code = code
