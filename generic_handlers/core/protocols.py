"""
Data-Operation Capability

The handlers only ever talk to storage through this protocol. Each call names
the data operation to run (a stored procedure, a table binding, ...) and may
raise any exception; handlers wrap failures in ``DataOperationError``.

Implementations must be safe for concurrent use when handlers are shared
across simultaneous requests.
"""

from typing import Any, List, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


@runtime_checkable
class DataOperations(Protocol):
    """Execute-by-id / insert / fetch-by-id / list capability."""

    def execute_by_id(self, identifier: Any, operation_name: str) -> None:
        """Run a by-id operation; no result beyond success or an exception."""
        ...

    def insert(self, record: BaseModel, operation_name: str) -> Any:
        """Store a record and return its newly generated identifier."""
        ...

    def fetch_by_id(self, identifier: Any, operation_name: str, record_type: Type[RecordT]) -> RecordT:
        """Load one record of ``record_type`` by identifier."""
        ...

    def list(self, operation_name: str, record_type: Type[RecordT]) -> List[RecordT]:
        """Load every record the operation yields, in the order it yields them."""
        ...
