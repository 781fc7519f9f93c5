"""
List Handler

Returns every record a list data operation yields. The request body is never
read, and responses are always marked non-cacheable so every call re-queries.
"""

from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel

from ..core import DataOperations
from ..exceptions import ConfigurationError
from ..models import NO_CACHE_HEADERS, ListEnvelope, RequestContext
from .base import BaseHandler

RecordT = TypeVar("RecordT", bound=BaseModel)


class ListHandler(BaseHandler, Generic[RecordT]):
    """Handler that returns an unfiltered collection of records."""

    envelope_class = ListEnvelope
    response_headers = NO_CACHE_HEADERS

    def __init__(
        self,
        operations: DataOperations,
        record_type: Type[RecordT],
        operation_name: str,
        **kwargs: Any
    ):
        """Initialize list handler.

        Args:
            operations: Data-operation capability
            record_type: Record type of each listed item
            operation_name: List data operation to run
            **kwargs: Hooks and config, see BaseHandler
        """
        super().__init__(operations, **kwargs)
        self.record_type = record_type
        self.operation_name = operation_name

    def validate_configuration(self) -> None:
        super().validate_configuration()
        if not self.operation_name:
            raise ConfigurationError("operation_name must be set in handler", setting="operation_name")

    def execute(self, body: bytes, context: RequestContext) -> ListEnvelope:
        records = self.run_operation(
            "list", self.operation_name,
            self.operations.list, self.operation_name, self.record_type
        )
        return self.envelope_class(items=list(records))
