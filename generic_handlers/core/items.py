"""
Record <-> DynamoDB item conversion.

boto3 returns every DynamoDB Number as ``Decimal`` and refuses Python floats
on write, so numbers are converted at this boundary and nowhere else.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _to_dynamodb(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _to_dynamodb(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_to_dynamodb(v) for v in obj]
    elif isinstance(obj, bool):
        return obj
    elif isinstance(obj, float):
        return Decimal(str(obj))
    return obj


def _from_dynamodb(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _from_dynamodb(v) for k, v in obj.items()}
    elif isinstance(obj, (list, set)):
        return [_from_dynamodb(v) for v in obj]
    elif isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    return obj


def record_to_item(record: BaseModel) -> Dict[str, Any]:
    """Convert a record into a DynamoDB item keyed by wire names.

    datetimes, UUIDs and enums become their JSON forms; floats become Decimal.
    """
    return _to_dynamodb(record.model_dump(mode="json", by_alias=True, exclude_none=True))


def item_to_record(item: Dict[str, Any], record_type: Type[RecordT]) -> RecordT:
    """Convert a DynamoDB item into ``record_type``.

    Raises:
        ValidationError: If the item does not fit the record type
    """
    try:
        return record_type.model_validate(_from_dynamodb(item))
    except Exception as e:
        logger.error(f"Failed to convert DynamoDB item to {record_type.__name__}: {e}")
        raise ValidationError(f"Failed to convert DynamoDB item to {record_type.__name__}: {e}", original_error=e) from e
