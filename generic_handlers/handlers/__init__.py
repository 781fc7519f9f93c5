"""
Handler Layer

One handler class per endpoint shape. All three share the lifecycle in
``base.BaseHandler``:

- FetchHandler: run a by-id data operation (no payload in the response)
- InsertHandler: insert a record, read it back, return it as ``Value``
- ListHandler: return every record of a list operation as ``List``

Architecture:
web/ -> handlers/ (this layer) -> core/ (data operations) -> DynamoDB
handlers/ (this layer) <- mapping/ (payload -> record)
"""

from .base import BaseHandler, ErrorHook, PreExecutionHook, SuccessHook
from .fetch_handler import FetchHandler
from .insert_handler import InsertHandler
from .list_handler import ListHandler

__all__ = [
    "BaseHandler",
    "ErrorHook",
    "PreExecutionHook",
    "SuccessHook",
    "FetchHandler",
    "InsertHandler",
    "ListHandler",
]
