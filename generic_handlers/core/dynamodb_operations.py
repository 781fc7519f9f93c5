"""
DynamoDB Data-Operation Backend

Implements the DataOperations protocol over DynamoDB tables. Where a SQL
backend would name stored procedures, this backend names table bindings:

    TableOperation(name="customer_insert", table="customers", action=OperationAction.PUT)
    TableOperation(name="customer_get", table="customers", action=OperationAction.GET)
    TableOperation(name="customer_list", table="customers", action=OperationAction.SCAN)

Supported calls per action:
- GET: execute_by_id (existence check), fetch_by_id
- DELETE: execute_by_id (conditional delete)
- PUT: insert (conditional put, identifier generated when absent)
- SCAN: list (all pages, DynamoDB order)
"""

import logging
import threading
import uuid
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from boto3.dynamodb.conditions import Attr
from pydantic import BaseModel, ConfigDict, Field

from ..config import HandlerConfig
from ..exceptions import ConfigurationError, ConflictError, ItemNotFoundError, UnknownOperationError
from .items import item_to_record, record_to_item
from .table_gateway import TableGateway, create_table_gateway

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class OperationAction(str, Enum):
    """What a named data operation does to its table."""
    GET = "get"
    PUT = "put"
    DELETE = "delete"
    SCAN = "scan"


class TableOperation(BaseModel):
    """Binding of a data-operation name to a DynamoDB table and action."""

    name: str = Field(..., min_length=1, description="Data-operation name used by handlers")
    table: str = Field(..., min_length=1, description="Base table name (prefixed via HandlerConfig)")
    action: OperationAction = Field(..., description="Action performed by the operation")
    key_attribute: str = Field(default="Id", description="Partition key attribute of the table")

    model_config = ConfigDict(frozen=True)


def _key_value(identifier: Any) -> Any:
    """Convert an identifier into a DynamoDB key value."""
    if isinstance(identifier, uuid.UUID):
        return str(identifier)
    if isinstance(identifier, float):
        return Decimal(str(identifier))
    return identifier


class DynamoDBDataOperations:
    """
    DataOperations backed by DynamoDB.

    Table gateways are created lazily and kept per thread, so one instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        config: HandlerConfig,
        operations: Iterable[TableOperation],
        id_factory: Optional[Callable[[], Any]] = None
    ):
        """Initialize the backend.

        Args:
            config: Handler configuration (AWS settings, table prefix)
            operations: Table bindings, one per data-operation name
            id_factory: Generates identifiers for inserted records that lack one
                        (defaults to uuid4 strings)
        """
        self.config = config
        self.operations: Dict[str, TableOperation] = {}
        for operation in operations:
            if operation.name in self.operations:
                raise ConfigurationError(f"Duplicate data operation '{operation.name}'", setting="operations")
            self.operations[operation.name] = operation
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._local = threading.local()

    def _resolve(self, operation_name: str, *allowed: OperationAction) -> TableOperation:
        operation = self.operations.get(operation_name)
        if operation is None:
            raise UnknownOperationError(operation_name, list(self.operations))
        if operation.action not in allowed:
            allowed_names = ", ".join(a.value for a in allowed)
            raise ConfigurationError(
                f"Data operation '{operation_name}' is a {operation.action.value} operation; expected {allowed_names}",
                setting=operation_name
            )
        return operation

    def _gateway(self, operation: TableOperation) -> TableGateway:
        gateways = getattr(self._local, 'gateways', None)
        if gateways is None:
            gateways = self._local.gateways = {}
        if operation.table not in gateways:
            gateways[operation.table] = create_table_gateway(self.config, operation.table)
        return gateways[operation.table]

    def execute_by_id(self, identifier: Any, operation_name: str) -> None:
        """
        Run a by-id operation.

        GET operations confirm the item exists; DELETE operations remove it.

        Raises:
            ItemNotFoundError: No item with this identifier
        """
        operation = self._resolve(operation_name, OperationAction.GET, OperationAction.DELETE)
        gateway = self._gateway(operation)
        key = {operation.key_attribute: _key_value(identifier)}

        if operation.action == OperationAction.GET:
            if gateway.get_item(key) is None:
                raise ItemNotFoundError(gateway.table_name, key)
            return

        try:
            gateway.delete_item(key, condition_expression=Attr(operation.key_attribute).exists())
        except ConflictError as e:
            raise ItemNotFoundError(gateway.table_name, key, original_error=e) from e

    def insert(self, record: BaseModel, operation_name: str) -> Any:
        """
        Store a record and return its identifier.

        An identifier already present on the record is kept; otherwise one is
        generated. Writes never overwrite an existing item.

        Raises:
            ConflictError: An item with this identifier already exists
        """
        operation = self._resolve(operation_name, OperationAction.PUT)
        gateway = self._gateway(operation)
        item = record_to_item(record)

        identifier = item.get(operation.key_attribute)
        if identifier is None:
            identifier = self.id_factory()
            item[operation.key_attribute] = _key_value(identifier)

        gateway.put_item(
            item,
            condition_expression=Attr(operation.key_attribute).not_exists(),
            resource_id=str(identifier)
        )
        logger.info(f"Inserted record via '{operation_name}': {identifier}")
        return identifier

    def fetch_by_id(self, identifier: Any, operation_name: str, record_type: Type[RecordT]) -> RecordT:
        """
        Load one record by identifier.

        Raises:
            ItemNotFoundError: No item with this identifier
            ValidationError: The stored item does not fit ``record_type``
        """
        operation = self._resolve(operation_name, OperationAction.GET)
        gateway = self._gateway(operation)
        key = {operation.key_attribute: _key_value(identifier)}

        item = gateway.get_item(key)
        if item is None:
            raise ItemNotFoundError(gateway.table_name, key)
        return item_to_record(item, record_type)

    def list(self, operation_name: str, record_type: Type[RecordT]) -> List[RecordT]:
        """Load every item of the operation's table, in scan order."""
        operation = self._resolve(operation_name, OperationAction.SCAN)
        gateway = self._gateway(operation)
        return [item_to_record(item, record_type) for item in gateway.scan_all()]
