from .verdict import PreExecutionVerdict
from .context import RequestContext
from .envelope import InsertEnvelope, ListEnvelope, ResultEnvelope
from .response import JSON_CONTENT_TYPE, NO_CACHE_HEADERS, HandlerResponse

__all__ = [
    # Pre-execution
    "PreExecutionVerdict",
    "RequestContext",

    # Envelopes (wire format)
    "ResultEnvelope",
    "InsertEnvelope",
    "ListEnvelope",

    # Transport response
    "HandlerResponse",
    "JSON_CONTENT_TYPE",
    "NO_CACHE_HEADERS",
]
