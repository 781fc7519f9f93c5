"""
Fetch-by-Id Handler

Reads an identifier from the posted JSON object and runs a named by-id data
operation with it. The operation returns nothing beyond success or failure
(an existence check, a delete, ...), so the success envelope has no payload.
"""

import logging
from typing import Any

from ..core import DataOperations
from ..exceptions import ConfigurationError
from ..mapping import IdentifierExtractor, decode_json_object
from ..models import RequestContext, ResultEnvelope
from .base import BaseHandler

logger = logging.getLogger(__name__)


class FetchHandler(BaseHandler):
    """Handler that calls a data operation with a single identifier."""

    envelope_class = ResultEnvelope

    def __init__(
        self,
        operations: DataOperations,
        operation_name: str,
        *,
        id_type: Any = int,
        id_field: str = "Id",
        **kwargs: Any
    ):
        """Initialize fetch handler.

        Args:
            operations: Data-operation capability
            operation_name: By-id data operation to run
            id_type: Identifier type (int, str, uuid.UUID)
            id_field: Wire name of the identifier in the posted JSON
            **kwargs: Hooks and config, see BaseHandler
        """
        super().__init__(operations, **kwargs)
        self.operation_name = operation_name
        self.identifier = IdentifierExtractor(id_type, id_field)

    def validate_configuration(self) -> None:
        super().validate_configuration()
        if not self.operation_name:
            raise ConfigurationError("operation_name must be set in handler", setting="operation_name")

    def execute(self, body: bytes, context: RequestContext) -> ResultEnvelope:
        identifier = self.identifier.extract(decode_json_object(body))
        self.run_operation(
            "execute_by_id", self.operation_name,
            self.operations.execute_by_id, identifier, self.operation_name
        )
        logger.debug(f"{self.operation_name} executed for id {identifier!r}")
        return self.envelope_class()
