from .payload import (
    FieldSpec,
    IdentifierExtractor,
    PayloadMapper,
    decode_json_object,
)

__all__ = [
    "FieldSpec",
    "IdentifierExtractor",
    "PayloadMapper",
    "decode_json_object",
]
