from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestContext(BaseModel):
    """
    Transport-neutral view of an incoming request.

    Passed to pre-execution hooks. ``raw`` carries the transport's own request
    object (e.g. a Starlette ``Request``) for hooks that need more than the
    common fields; it is never serialized.
    """

    method: str = Field(default="POST", description="HTTP method")
    path: str = Field(default="/", description="Request path")
    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers, lower-cased names")
    query_params: Dict[str, str] = Field(default_factory=dict, description="Query string parameters")
    client_host: Optional[str] = Field(None, description="Remote address, when known")
    raw: Any = Field(default=None, exclude=True, description="Transport request object")

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)
