from enum import Enum


class PreExecutionVerdict(str, Enum):
    """Outcome of a pre-execution hook.

    Anything other than ``OK`` aborts the request before the payload is read.
    """
    OK = "NoErrors"
    NOT_AUTHENTICATED = "NotAuthenticated"
    NOT_AUTHORIZED = "NotAuthorized"
    INVALID_REQUEST = "InvalidRequest"
    RATE_LIMITED = "RateLimited"
    UNKNOWN = "Unknown"
