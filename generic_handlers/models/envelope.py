"""
Result Envelopes

Every request produces exactly one envelope. The wire shape is fixed:

    {"IsSuccessful": bool,
     "ErrorMessage": str,      # failure only
     "CallingMethod": str,     # failure only
     "Value": {...} | "List": [...]}   # variant payload, success only

``ResultEnvelope`` is the fetch-by-id shape (no payload). ``InsertEnvelope``
adds ``Value`` and ``ListEnvelope`` adds ``List``.
"""

from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python

RecordT = TypeVar("RecordT")


class ResultEnvelope(BaseModel):
    """Uniform response wrapper shared by all handler variants."""

    is_successful: bool = Field(default=False, alias="IsSuccessful")
    error_message: Optional[str] = Field(default=None, alias="ErrorMessage")
    calling_method: Optional[str] = Field(default=None, alias="CallingMethod")

    # Name of the attribute holding the variant payload, if any
    payload_attribute: ClassVar[Optional[str]] = None

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    @property
    def payload(self) -> Any:
        if self.payload_attribute is None:
            return None
        return getattr(self, self.payload_attribute)

    def to_wire(self) -> Dict[str, Any]:
        """Build the JSON-ready wire dictionary.

        Optional keys are omitted rather than sent as null, so a failure
        envelope never carries a partial payload. Null record fields are
        omitted too.
        """
        wire: Dict[str, Any] = {"IsSuccessful": self.is_successful}
        if self.error_message is not None:
            wire["ErrorMessage"] = self.error_message
        if self.calling_method is not None:
            wire["CallingMethod"] = self.calling_method
        if self.payload_attribute is not None:
            payload = self.payload
            if payload is not None:
                alias = type(self).model_fields[self.payload_attribute].alias
                wire[alias] = to_jsonable_python(payload, by_alias=True, exclude_none=True)
        return wire

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "ResultEnvelope":
        """Rebuild an envelope from its wire dictionary."""
        return cls.model_validate(data)

    @classmethod
    def failure(cls, error_message: str, calling_method: str) -> "ResultEnvelope":
        return cls(is_successful=False, error_message=error_message, calling_method=calling_method)


class InsertEnvelope(ResultEnvelope, Generic[RecordT]):
    """Envelope returned by the insert handler; ``Value`` is the read-back record."""

    value: Optional[RecordT] = Field(default=None, alias="Value")

    payload_attribute: ClassVar[Optional[str]] = "value"


class ListEnvelope(ResultEnvelope, Generic[RecordT]):
    """Envelope returned by the list handler; ``List`` keeps the operation's order."""

    items: Optional[List[RecordT]] = Field(default=None, alias="List")

    payload_attribute: ClassVar[Optional[str]] = "items"
