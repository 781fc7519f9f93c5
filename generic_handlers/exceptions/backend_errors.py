"""
Backend Exceptions for the DynamoDB Data-Operation Capability

Raised by ``DynamoDBDataOperations`` and ``TableGateway``. Handlers never let
these escape: they are wrapped in ``DataOperationError`` at the call site.
"""

from typing import Any, Dict, Optional

from .base import GenericHandlerError


class ValidationError(GenericHandlerError):
    """Raised when DynamoDB rejects a request or an item cannot become a record.

    Used for:
    - ValidationException from DynamoDB
    - Items that do not validate against the requested record type
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class ItemNotFoundError(GenericHandlerError):
    """Raised when a specific item is not found in DynamoDB."""

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}' with key: {key}"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, original_error, context)


class ConflictError(GenericHandlerError):
    """Raised when a conditional write fails due to existing (or missing) data.

    Used for:
    - ConditionalCheckFailedException from DynamoDB
    - Inserting a record whose identifier already exists
    - Transaction conflicts
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class ConnectionError(GenericHandlerError):
    """Raised when connection to DynamoDB fails.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures at the AWS level
    - Missing tables and invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(GenericHandlerError):
    """Raised when an operation fails due to throttling or a temporary outage."""

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


class UnknownOperationError(GenericHandlerError):
    """Raised when a handler names a data operation the backend does not know."""

    def __init__(self, operation_name: str, known_operations: Optional[list] = None):
        self.operation_name = operation_name
        self.known_operations = sorted(known_operations or [])
        context = {'operation': operation_name}
        if self.known_operations:
            context['known_operations'] = self.known_operations
        super().__init__(f"Unknown data operation '{operation_name}'", None, context)
