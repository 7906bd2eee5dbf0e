"""
Test suite for UpstreamFunctionClient.

Outbound HTTP is intercepted with respx.

System role: Verification of outbound request shape
"""

import json

import httpx
import pytest

from caritas.models.gateway import FunctionCall

TARGET = "https://upstream.test/functions/v1/ai/chat"


class TestUpstreamFunctionClient:
    """Test suite for UpstreamFunctionClient.send() and invoke()."""

    def test_target_url_joins_without_double_slash(self, function_client) -> None:
        assert function_client.target_url("ai/chat") == TARGET

    def test_headers_without_authorization(self, function_client) -> None:
        headers = function_client.build_headers()

        assert headers == {
            "Content-Type": "application/json",
            "apikey": "test-anon-key",
            "X-Client-Info": "caritas-test",
        }

    @pytest.mark.asyncio
    async def test_send_post_serializes_body(self, function_client, respx_mock) -> None:
        route = respx_mock.post(TARGET).mock(return_value=httpx.Response(200, json={"ok": True}))
        call = FunctionCall.create(
            "ai/chat",
            "POST",
            headers={"Authorization": "Bearer user", "Cookie": "dropped"},
            body={"message": "héllo", "n": [1, 2]},
        )

        response = await function_client.send(call)

        assert response.status_code == 200
        request = route.calls.last.request
        assert json.loads(request.content) == {"message": "héllo", "n": [1, 2]}
        assert request.headers["apikey"] == "test-anon-key"
        assert request.headers["X-Client-Info"] == "caritas-test"
        assert request.headers["Authorization"] == "Bearer user"
        assert "cookie" not in request.headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "HEAD"])
    async def test_bodyless_methods_send_no_body(self, function_client, respx_mock, method) -> None:
        route = respx_mock.route(method=method, url=TARGET).mock(return_value=httpx.Response(200))
        call = FunctionCall.create("ai/chat", method, body={"ignored": True})

        await function_client.send(call)

        request = route.calls.last.request
        assert request.method == method
        assert request.content == b""
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_invoke_posts_payload(self, function_client, respx_mock) -> None:
        route = respx_mock.post("https://upstream.test/functions/v1/process-document").mock(
            return_value=httpx.Response(200, json={"result": "done"})
        )

        response = await function_client.invoke(
            "process-document", {"filePath": "u/1_a.pdf"}, authorization="Bearer user"
        )

        assert response.json() == {"result": "done"}
        assert route.calls.last.request.headers["Authorization"] == "Bearer user"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, function_client, respx_mock) -> None:
        respx_mock.get(TARGET).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(httpx.ConnectError):
            await function_client.send(FunctionCall.create("ai/chat", "GET"))
