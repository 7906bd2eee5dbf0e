"""
Gateway domain models.

Function call and proxy result contracts for the upstream function gateway.

Dependencies: pydantic
System role: Gateway request/response contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from caritas.core.exceptions import ClientPreconditionError

HttpMethod = Literal["GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS"]

BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def normalize_function_name(raw: str | None) -> str:
    """
    Validate and normalize a function path.

    The path is treated as a list of opaque segments joined by '/'.

    Args:
        raw: Function path as received from the client

    Returns:
        str: Path without leading/trailing slashes

    Raises:
        ClientPreconditionError: If the path is empty or not path-safe
    """
    name = (raw or "").strip().strip("/")
    if not name:
        raise ClientPreconditionError("Function path is required", field="function_path")

    segments = name.split("/")
    if any(seg in ("", ".", "..") or "\\" in seg for seg in segments):
        raise ClientPreconditionError(
            "Invalid function path",
            field="function_path",
            details={"function_path": name},
        )
    return name


class FunctionCall(BaseModel):
    """One outbound call to a named upstream function."""

    model_config = ConfigDict(frozen=True)

    target_name: str = Field(description="Function path below /functions/v1/")
    method: HttpMethod = Field(description="HTTP method to use upstream")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Caller headers (only Authorization is forwarded)",
    )
    body: Any | None = Field(default=None, description="Opaque JSON payload")

    @classmethod
    def create(
        cls,
        function_name: str | None,
        method: str,
        headers: dict[str, str] | None = None,
        body: Any | None = None,
    ) -> "FunctionCall":
        """Build a call after validating the function name."""
        return cls(
            target_name=normalize_function_name(function_name),
            method=method.upper(),
            headers=dict(headers or {}),
            body=body,
        )

    @property
    def carries_body(self) -> bool:
        """Whether a body is sent upstream for this call."""
        return self.method not in BODYLESS_METHODS and self.body is not None

    def header(self, name: str) -> str | None:
        """Case-insensitive lookup of a caller header."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class ProxyResult(BaseModel):
    """Outcome of one gateway round trip."""

    status_code: int
    body: Any | None = None
    error_detail: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
