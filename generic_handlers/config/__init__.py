from .config import ErrorDetail, HandlerConfig

__all__ = [
    "ErrorDetail",
    "HandlerConfig",
]
