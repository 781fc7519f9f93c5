from typing import Any, Dict, Optional


class GenericHandlerError(Exception):
    """Base exception for pipeline and backend errors.

    Attributes:
        message: Human-readable error message
        original_error: Underlying exception, when this one wraps another
        context: Key/value details appended to ``str(error)``; these end up in
                 the wire ErrorMessage under the ``full`` and ``message`` detail levels
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, original_error={self.original_error!r}, context={self.context!r})"
