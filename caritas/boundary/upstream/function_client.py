"""
Upstream function host client.

Builds outbound requests to named remote functions: target URL, fixed
headers, optional caller Authorization, and JSON body for methods that
carry one. Responses are returned raw; interpretation is left to callers.

Dependencies: httpx, caritas.configs.upstream
System role: Outbound transport shared by the gateway and the document orchestrator
"""

import json
import logging

import httpx

from caritas.configs.upstream import UpstreamSettings
from caritas.models.gateway import FunctionCall

logger = logging.getLogger(__name__)


class UpstreamFunctionClient:
    """Sends FunctionCalls to {base_url}/functions/v1/{name}."""

    def __init__(self, http_client: httpx.AsyncClient, settings: UpstreamSettings) -> None:
        """
        Initialize upstream client.

        Args:
            http_client: Shared async HTTP client (owned by the caller)
            settings: Upstream base URL, key and timeout
        """
        self._http = http_client
        self._settings = settings

    def target_url(self, function_name: str) -> str:
        return f"{self._settings.functions_url}/{function_name}"

    def build_headers(self, authorization: str | None = None) -> dict[str, str]:
        """
        Outbound headers for every upstream call.

        Only the caller's Authorization is forwarded so user-scoped calls
        stay user-scoped upstream.
        """
        headers = {
            "Content-Type": "application/json",
            "apikey": self._settings.anon_key.get_secret_value(),
            "X-Client-Info": self._settings.client_info,
        }
        if authorization:
            headers["Authorization"] = authorization
        return headers

    async def send(self, call: FunctionCall) -> httpx.Response:
        """
        Perform one round trip. No retries.

        Args:
            call: Validated function call

        Returns:
            httpx.Response: Upstream response, any status

        Raises:
            httpx.HTTPError: On transport failure or timeout
        """
        url = self.target_url(call.target_name)
        content = None
        if call.carries_body:
            content = json.dumps(call.body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

        logger.info(
            "Calling upstream function",
            extra={"method": call.method, "target_url": url, "has_body": content is not None},
        )
        return await self._http.request(
            call.method,
            url,
            headers=self.build_headers(call.header("Authorization")),
            content=content,
            timeout=self._settings.timeout_seconds,
        )

    async def invoke(
        self,
        function_name: str,
        payload: dict,
        authorization: str | None = None,
    ) -> httpx.Response:
        """POST a JSON payload to a named function."""
        headers = {"Authorization": authorization} if authorization else {}
        call = FunctionCall.create(function_name, "POST", headers=headers, body=payload)
        return await self.send(call)
