"""
Insert Handler

Maps the posted JSON object onto the insert shape, inserts it, then reads the
new record back by its generated identifier using the read-back shape. The
two shapes share only the identifier.

Insert and read-back are reported as one unit: if the insert succeeds and the
read-back fails, the request fails with a DataOperationError whose stage is
``fetch_by_id``. The insert is not rolled back here.
"""

import logging
from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel

from ..core import DataOperations
from ..exceptions import ConfigurationError
from ..mapping import PayloadMapper, decode_json_object
from ..models import InsertEnvelope, RequestContext
from .base import BaseHandler

logger = logging.getLogger(__name__)

InsertT = TypeVar("InsertT", bound=BaseModel)
ReadBackT = TypeVar("ReadBackT", bound=BaseModel)


class InsertHandler(BaseHandler, Generic[InsertT, ReadBackT]):
    """Handler that inserts one record and returns it as stored."""

    envelope_class = InsertEnvelope

    def __init__(
        self,
        operations: DataOperations,
        insert_type: Type[InsertT],
        read_back_type: Type[ReadBackT],
        insert_operation_name: str,
        fetch_operation_name: str,
        **kwargs: Any
    ):
        """Initialize insert handler.

        Args:
            operations: Data-operation capability
            insert_type: Record type accepted from the client
            read_back_type: Record type returned after the insert
            insert_operation_name: Data operation that stores an insert_type record
            fetch_operation_name: Data operation that loads a read_back_type record by id
            **kwargs: Hooks and config, see BaseHandler
        """
        super().__init__(operations, **kwargs)
        self.insert_type = insert_type
        self.read_back_type = read_back_type
        self.insert_operation_name = insert_operation_name
        self.fetch_operation_name = fetch_operation_name
        self.mapper = PayloadMapper(insert_type)

    def validate_configuration(self) -> None:
        super().validate_configuration()
        if not self.insert_operation_name:
            raise ConfigurationError("insert_operation_name must be set in handler", setting="insert_operation_name")
        if not self.fetch_operation_name:
            raise ConfigurationError("fetch_operation_name must be set in handler", setting="fetch_operation_name")

    def execute(self, body: bytes, context: RequestContext) -> InsertEnvelope:
        record = self.mapper.map(decode_json_object(body))

        identifier = self.run_operation(
            "insert", self.insert_operation_name,
            self.operations.insert, record, self.insert_operation_name
        )
        logger.info(f"Inserted {self.insert_type.__name__} via {self.insert_operation_name}: {identifier!r}")

        stored = self.run_operation(
            "fetch_by_id", self.fetch_operation_name,
            self.operations.fetch_by_id, identifier, self.fetch_operation_name, self.read_back_type
        )
        return self.envelope_class(value=stored)
