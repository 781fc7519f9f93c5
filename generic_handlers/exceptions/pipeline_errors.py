"""
Pipeline Exceptions for Generic Handlers

These exceptions describe why a single request through a handler failed.
Every one of them is caught at the top of the handler lifecycle and turned
into a failure envelope; none of them reach the transport layer.

Organized by lifecycle stage:
1. Configuration Errors
2. Pre-Execution Errors
3. Payload Errors
4. Data Operation Errors
"""

from typing import Any, Optional

from ..models.verdict import PreExecutionVerdict
from .base import GenericHandlerError


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(GenericHandlerError):
    """Raised when a handler is not set up correctly.

    This is a deployment or programming defect, e.g. an empty operation name.
    The handler keeps failing until it is reconfigured.
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Human-readable error message
            setting: Name of the offending handler setting
        """
        self.setting = setting
        context = {}
        if setting:
            context['setting'] = setting
        super().__init__(message, None, context)


# =============================================================================
# Pre-Execution Errors
# =============================================================================

class PreconditionFailed(GenericHandlerError):
    """Raised when the pre-execution hook rejects a request.

    The verdict stays available on the exception so error hooks can branch
    on it instead of parsing the message.
    """

    def __init__(self, verdict: PreExecutionVerdict, message: str = "PreExecution Failed"):
        """Initialize precondition failure.

        Args:
            verdict: The non-OK verdict returned by the hook
            message: Human-readable error message
        """
        self.verdict = verdict
        super().__init__(message, None, {'verdict': getattr(verdict, 'value', verdict)})


# =============================================================================
# Payload Errors
# =============================================================================

class MalformedPayload(GenericHandlerError):
    """Raised when the request body is missing, unparseable or incomplete."""


class MissingFieldError(MalformedPayload):
    """Raised when a required field is absent from the JSON object."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Required field '{field_name}' is missing from payload", None, {'field': field_name})


class FieldConversionError(MalformedPayload):
    """Raised when a JSON value cannot be converted to the field's declared type."""

    def __init__(self, field_name: str, value: Any, target_type: Any, original_error: Optional[Exception] = None):
        """Initialize field conversion error.

        Args:
            field_name: Wire name of the offending field
            value: The JSON value that failed conversion
            target_type: Declared type of the field
            original_error: The converter's exception
        """
        self.field_name = field_name
        self.value = value
        self.target_type = target_type
        type_name = getattr(target_type, '__name__', repr(target_type))
        message = f"Field '{field_name}' value {value!r} cannot be converted to {type_name}"
        super().__init__(message, original_error, {'field': field_name})


# =============================================================================
# Data Operation Errors
# =============================================================================

class DataOperationError(GenericHandlerError):
    """Raised when the underlying data operation fails.

    Wraps whatever the data-operation capability raised. ``stage`` names the
    call that failed (``execute_by_id``, ``insert``, ``fetch_by_id``, ``list``)
    so an insert that succeeded before a failed read-back can be told apart.
    """

    def __init__(self, operation_name: str, stage: str, original_error: Exception):
        """Initialize data operation error.

        Args:
            operation_name: Name of the data operation that was invoked
            stage: Which data-operation call failed
            original_error: The underlying exception
        """
        self.operation_name = operation_name
        self.stage = stage
        message = f"Data operation '{operation_name}' failed during {stage}: {original_error}"
        context = {
            'operation': operation_name,
            'stage': stage,
        }
        super().__init__(message, original_error, context)
