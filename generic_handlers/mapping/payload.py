"""
Payload Mapping

Turns an untyped JSON object into a record instance. Each record type is a
pydantic model; its field table (wire name, declared type, required flag) is
resolved once when the mapper is built. Each request is validated in a single
pydantic pass, so field validators run exactly once per value.

Errors name the offending field:
- MissingFieldError: a required field is absent
- FieldConversionError: a value cannot be converted to the declared type
- MalformedPayload: the body is not a JSON object at all
"""

import json
import logging
from typing import Any, Dict, Generic, List, NamedTuple, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import FieldConversionError, MalformedPayload, MissingFieldError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class FieldSpec(NamedTuple):
    """One row of a record type's field table."""
    wire_name: str
    attribute: str
    target_type: Any
    required: bool


def decode_json_object(body: Any) -> Dict[str, Any]:
    """Decode a raw request body into a JSON object.

    Args:
        body: Raw body as bytes or str

    Returns:
        The decoded dictionary

    Raises:
        MalformedPayload: Empty body, invalid UTF-8/JSON, or a non-object document
    """
    if body is None or (isinstance(body, (bytes, bytearray, str)) and not body.strip()):
        raise MalformedPayload("Request body is empty")
    try:
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")
        decoded = json.loads(body)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedPayload(f"Request body is not valid JSON: {e}", e) from e
    if not isinstance(decoded, dict):
        raise MalformedPayload(f"Request body must be a JSON object, got {type(decoded).__name__}")
    return decoded


def _convert(field_name: str, converter: TypeAdapter, target_type: Any, value: Any) -> Any:
    try:
        return converter.validate_python(value)
    except PydanticValidationError as e:
        raise FieldConversionError(field_name, value, target_type, e) from e


class PayloadMapper(Generic[RecordT]):
    """
    Maps decoded JSON objects onto one record type.

    Keys are matched against each field's alias (its wire name), falling back
    to the attribute name when no alias is declared. Unknown keys are ignored
    and optional fields keep their model defaults.
    """

    def __init__(self, record_type: Type[RecordT]):
        """Build the field table for ``record_type``.

        Args:
            record_type: Pydantic model describing the record
        """
        if not (isinstance(record_type, type) and issubclass(record_type, BaseModel)):
            raise TypeError(f"record_type must be a pydantic model class, got {record_type!r}")
        self.record_type = record_type
        self.fields: List[FieldSpec] = [
            FieldSpec(
                wire_name=info.alias or name,
                attribute=name,
                target_type=info.annotation,
                required=info.is_required(),
            )
            for name, info in record_type.model_fields.items()
        ]
        self._by_wire_name = {spec.wire_name: spec for spec in self.fields}

    @property
    def field_names(self) -> List[str]:
        return [spec.wire_name for spec in self.fields]

    def map(self, payload: Any) -> RecordT:
        """Convert a decoded JSON object into a record.

        Raises:
            MalformedPayload: payload is not a dict
            MissingFieldError: a required field is absent
            FieldConversionError: a value cannot be converted
        """
        if not isinstance(payload, dict):
            raise MalformedPayload(f"Payload must be a JSON object, got {type(payload).__name__}")

        for spec in self.fields:
            if spec.required and spec.wire_name not in payload:
                raise MissingFieldError(spec.wire_name)

        values = {spec.wire_name: payload[spec.wire_name] for spec in self.fields if spec.wire_name in payload}
        try:
            record = self.record_type.model_validate(values)
        except PydanticValidationError as e:
            raise self._translate(e, payload) from e
        logger.debug(f"Mapped payload onto {self.record_type.__name__}: {sorted(values)}")
        return record

    def _translate(self, error: PydanticValidationError, payload: Dict[str, Any]) -> Exception:
        """Turn the first pydantic error into the pipeline exception naming its field."""
        errors = error.errors()
        first = errors[0] if errors else {}
        location = first.get("loc", ())
        spec: Optional[FieldSpec] = self._by_wire_name.get(str(location[0])) if location else None

        # Model-level validators report no field location
        if spec is None:
            return FieldConversionError(self.record_type.__name__, None, self.record_type, error)
        if first.get("type") == "missing":
            return MissingFieldError(spec.wire_name)
        return FieldConversionError(spec.wire_name, payload.get(spec.wire_name), spec.target_type, error)


class IdentifierExtractor:
    """Pulls a single identifier field out of a decoded JSON object."""

    def __init__(self, id_type: Any = int, field_name: str = "Id"):
        """
        Args:
            id_type: Identifier type (int, str, uuid.UUID, ...)
            field_name: Wire name of the identifier field
        """
        self.id_type = id_type
        self.field_name = field_name
        if id_type is str:
            # JSON numbers are accepted where a string identifier is declared
            self.converter = TypeAdapter(str, config=ConfigDict(coerce_numbers_to_str=True))
        else:
            self.converter = TypeAdapter(id_type)

    def extract(self, payload: Any) -> Any:
        if not isinstance(payload, dict):
            raise MalformedPayload(f"Payload must be a JSON object, got {type(payload).__name__}")
        if self.field_name not in payload or payload[self.field_name] is None:
            raise MissingFieldError(self.field_name)
        return _convert(self.field_name, self.converter, self.id_type, payload[self.field_name])
