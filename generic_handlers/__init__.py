"""
Generic Handlers

A generic request-handling pipeline that exposes single-row data operations
(fetch-by-id, insert, list) as JSON endpoints. Handlers are parameterized by
record types (pydantic models), data-operation names, a data-operation
capability, and three hooks: pre-execution gate, success transform, error
transform. A DynamoDB-backed capability (boto3) and a FastAPI surface ship
with the package.
"""

from .config import ErrorDetail, HandlerConfig
from .exceptions import (
    ConfigurationError,
    ConflictError,
    ConnectionError,
    DataOperationError,
    FieldConversionError,
    GenericHandlerError,
    ItemNotFoundError,
    MalformedPayload,
    MissingFieldError,
    PreconditionFailed,
    RetryableError,
    UnknownOperationError,
    ValidationError,
)
from .models import (
    HandlerResponse,
    InsertEnvelope,
    ListEnvelope,
    PreExecutionVerdict,
    RequestContext,
    ResultEnvelope,
)
from .mapping import IdentifierExtractor, PayloadMapper, decode_json_object
from .core import (
    DataOperations,
    DynamoDBDataOperations,
    OperationAction,
    TableGateway,
    TableOperation,
    create_table_gateway,
)
from .handlers import (
    BaseHandler,
    FetchHandler,
    InsertHandler,
    ListHandler,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "ErrorDetail",
    "HandlerConfig",

    # Exceptions
    "GenericHandlerError",
    "ConfigurationError",
    "PreconditionFailed",
    "MalformedPayload",
    "FieldConversionError",
    "MissingFieldError",
    "DataOperationError",
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "RetryableError",
    "UnknownOperationError",
    "ValidationError",

    # Models
    "HandlerResponse",
    "InsertEnvelope",
    "ListEnvelope",
    "PreExecutionVerdict",
    "RequestContext",
    "ResultEnvelope",

    # Payload mapping
    "IdentifierExtractor",
    "PayloadMapper",
    "decode_json_object",

    # Data operations
    "DataOperations",
    "DynamoDBDataOperations",
    "OperationAction",
    "TableGateway",
    "TableOperation",
    "create_table_gateway",

    # Handlers
    "BaseHandler",
    "FetchHandler",
    "InsertHandler",
    "ListHandler",
]
