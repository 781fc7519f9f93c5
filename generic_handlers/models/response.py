from typing import Dict

from pydantic import BaseModel, Field

JSON_CONTENT_TYPE = "application/json"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "-1",
}


class HandlerResponse(BaseModel):
    """
    What a handler hands back to the transport.

    The status code is always 200: success or failure is signaled only by
    ``IsSuccessful`` inside the body. Existing clients depend on this.
    """

    status_code: int = Field(default=200)
    content_type: str = Field(default=JSON_CONTENT_TYPE)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = Field(default=b"")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def is_cacheable(self) -> bool:
        cache_control = self.headers.get("Cache-Control", "")
        return "no-cache" not in cache_control and "no-store" not in cache_control
