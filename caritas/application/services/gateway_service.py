"""
Upstream function gateway.

Turns one inbound function call into one outbound call and relays the
outcome: 2xx passes through untouched, non-2xx keeps the upstream status
with a structured error, transport failures become a fixed 500.

Dependencies: httpx, caritas.boundary.upstream
System role: Pass-through proxy for named backend functions
"""

import logging
from typing import Any

import httpx

from caritas.boundary.upstream.function_client import UpstreamFunctionClient
from caritas.models.gateway import FunctionCall, ProxyResult
from caritas.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, apikey, X-Client-Info",
}


def _decode_body(response: httpx.Response) -> Any | None:
    if not response.content:
        return None
    return response.json()


class FunctionGateway:
    """
    Stateless gateway to the upstream function host.

    Holds no state between calls and never retries; the caller owns
    retry policy.
    """

    def __init__(self, client: UpstreamFunctionClient) -> None:
        """
        Initialize gateway.

        Args:
            client: Outbound client for the upstream function host
        """
        self.client = client

    async def forward(self, call: FunctionCall) -> ProxyResult:
        """
        Forward one call upstream.

        Args:
            call: Validated function call

        Returns:
            ProxyResult: Upstream status and body, or a structured error
        """
        if call.method == "OPTIONS":
            return ProxyResult(status_code=200)

        try:
            response = await self.client.send(call)
            if not response.is_success:
                logger.warning(
                    "Upstream function error",
                    extra={
                        "function": call.target_name,
                        "status_code": response.status_code,
                        "reason": response.reason_phrase,
                    },
                )
                return ProxyResult(
                    status_code=response.status_code,
                    body={
                        "error": f"Upstream function error: {response.reason_phrase}",
                        "details": response.text,
                    },
                    error_detail=response.text,
                )

            return ProxyResult(status_code=response.status_code, body=_decode_body(response))

        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a 2xx whose body is not JSON
            log_exception_with_context(
                logger,
                "Proxy error",
                e,
                function=call.target_name,
                method=call.method,
            )
            return ProxyResult(
                status_code=500,
                body={"error": "Internal server error", "message": str(e)},
                error_detail=str(e),
            )
