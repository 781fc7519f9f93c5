"""
Shared Handler Lifecycle

Every handler variant runs the same pipeline:

    pre-execution hook -> payload decode -> data operation -> envelope
        -> success hook | error hook -> JSON response

Subclasses supply only the middle (``execute``) and their configuration
check. Everything that can go wrong before the response is built is caught
here, logged, and turned into a failure envelope carrying a diagnostic
message and the handler's class name. The response is always HTTP 200;
clients read ``IsSuccessful`` to tell success from failure.
"""

import logging
import traceback
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Type

from pydantic_core import PydanticSerializationError, to_json

from ..config import ErrorDetail, HandlerConfig
from ..core import DataOperations
from ..exceptions import ConfigurationError, DataOperationError, PreconditionFailed
from ..models import HandlerResponse, PreExecutionVerdict, RequestContext, ResultEnvelope

logger = logging.getLogger(__name__)

PreExecutionHook = Callable[[RequestContext], PreExecutionVerdict]
SuccessHook = Callable[[ResultEnvelope], Any]
ErrorHook = Callable[[ResultEnvelope, Exception], Any]


class BaseHandler(ABC):
    """
    Base class for the fetch, insert and list handlers.

    Handlers are configured once at construction and never mutated by
    ``handle``, so one instance can serve concurrent requests as long as the
    data operations and hooks it was given are themselves thread-safe.
    """

    envelope_class: Type[ResultEnvelope] = ResultEnvelope

    # Extra headers sent with every response from this handler type
    response_headers: Dict[str, str] = {}

    def __init__(
        self,
        operations: DataOperations,
        *,
        pre_execution: Optional[PreExecutionHook] = None,
        on_success: Optional[SuccessHook] = None,
        on_error: Optional[ErrorHook] = None,
        config: Optional[HandlerConfig] = None
    ):
        """Initialize the handler.

        Args:
            operations: Data-operation capability the handler invokes
            pre_execution: Gate run before anything else; non-OK verdicts abort
            on_success: Replaces the success envelope with its return value
            on_error: Receives (envelope, error); its return value becomes the body
            config: Error-detail policy (defaults to HandlerConfig from the environment)
        """
        self.operations = operations
        self.pre_execution = pre_execution
        self.on_success = on_success
        self.on_error = on_error
        self.config = config or HandlerConfig()

    @property
    def calling_method(self) -> str:
        """Tag written to CallingMethod on failure."""
        return type(self).__name__

    def validate_configuration(self) -> None:
        """Raise ConfigurationError if the handler cannot serve requests."""
        if self.operations is None:
            raise ConfigurationError("Data operations must be set in handler", setting="operations")

    @abstractmethod
    def execute(self, body: bytes, context: RequestContext) -> ResultEnvelope:
        """Decode the payload, run the data operation(s), return the success envelope."""

    def handle(self, body: bytes = b"", context: Optional[RequestContext] = None) -> HandlerResponse:
        """
        Run one request through the pipeline.

        Args:
            body: Raw request body
            context: Transport-neutral request information for the pre-execution hook

        Returns:
            HandlerResponse with status 200 and a JSON body
        """
        context = context or RequestContext()
        try:
            self.validate_configuration()
            self.check_preconditions(context)
            envelope = self.execute(body, context)
            envelope.is_successful = True
            result = self.on_success(envelope) if self.on_success else envelope
        except Exception as e:
            logger.error(f"{self.calling_method} failed on {context.path}: {e}", exc_info=True)
            envelope = self.envelope_class.failure(self.describe_error(e), self.calling_method)
            result = self.on_error(envelope, e) if self.on_error else envelope

        return self.build_response(result)

    def check_preconditions(self, context: RequestContext) -> None:
        if self.pre_execution is None:
            return
        verdict = self.pre_execution(context)
        if verdict != PreExecutionVerdict.OK:
            logger.warning(f"{self.calling_method} rejected by pre-execution hook: {verdict}")
            raise PreconditionFailed(verdict)

    def run_operation(self, stage: str, operation_name: str, call: Callable[..., Any], *args: Any) -> Any:
        """Invoke a data-operation call, wrapping any failure in DataOperationError."""
        try:
            return call(*args)
        except Exception as e:
            raise DataOperationError(operation_name, stage, e) from e

    def describe_error(self, error: Exception) -> str:
        """Build the ErrorMessage text according to the configured detail level."""
        detail = self.config.error_detail
        if detail == ErrorDetail.GENERIC:
            return self.config.generic_error_message
        if detail == ErrorDetail.MESSAGE:
            return f"{type(error).__name__}: {error}"
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))

    def build_response(self, result: Any) -> HandlerResponse:
        """Serialize the chosen result into a JSON response.

        Serialization failures are not request-level errors and propagate.
        """
        payload = result.to_wire() if isinstance(result, ResultEnvelope) else result
        try:
            body = to_json(payload, by_alias=True)
        except PydanticSerializationError:
            logger.critical(f"{self.calling_method} produced a response that cannot be serialized to JSON", exc_info=True)
            raise
        return HandlerResponse(headers=dict(self.response_headers), body=body)
