# Base exception
from .base import GenericHandlerError

# Pipeline exceptions (one per handler lifecycle stage)
from .pipeline_errors import (
    ConfigurationError,
    DataOperationError,
    FieldConversionError,
    MalformedPayload,
    MissingFieldError,
    PreconditionFailed,
)

# Backend exceptions raised by the DynamoDB data-operation capability
from .backend_errors import (
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    RetryableError,
    UnknownOperationError,
    ValidationError,
)

__all__ = [
    # Base exception
    "GenericHandlerError",

    # Pipeline exceptions
    "ConfigurationError",
    "DataOperationError",
    "FieldConversionError",
    "MalformedPayload",
    "MissingFieldError",
    "PreconditionFailed",

    # Backend exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "RetryableError",
    "UnknownOperationError",
    "ValidationError",
]
