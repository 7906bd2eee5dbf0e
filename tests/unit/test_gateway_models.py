"""
Test suite for function call models.

System role: Verification of function path validation and call shape
"""

import pytest
from pydantic import ValidationError

from caritas.core.exceptions import ClientPreconditionError
from caritas.models.gateway import FunctionCall, ProxyResult, normalize_function_name


class TestNormalizeFunctionName:
    """Test suite for normalize_function_name()."""

    @pytest.mark.parametrize("raw", [None, "", "/", "  ", "//"])
    def test_missing_path_should_be_rejected(self, raw) -> None:
        with pytest.raises(ClientPreconditionError) as exc_info:
            normalize_function_name(raw)
        assert exc_info.value.message == "Function path is required"

    @pytest.mark.parametrize("raw", ["../admin", "a/./b", "a//b", "a\\b"])
    def test_unsafe_path_should_be_rejected(self, raw: str) -> None:
        with pytest.raises(ClientPreconditionError) as exc_info:
            normalize_function_name(raw)
        assert exc_info.value.message == "Invalid function path"

    def test_nested_path_is_kept(self) -> None:
        assert normalize_function_name("/ai/chat/") == "ai/chat"


class TestFunctionCall:
    """Test suite for FunctionCall."""

    def test_create_uppercases_method(self) -> None:
        call = FunctionCall.create("chat", "post", body={"q": 1})
        assert call.method == "POST"
        assert call.carries_body

    @pytest.mark.parametrize("method", ["GET", "HEAD"])
    def test_bodyless_methods_never_carry_a_body(self, method: str) -> None:
        call = FunctionCall.create("chat", method, body={"ignored": True})
        assert not call.carries_body

    def test_unknown_method_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FunctionCall.create("chat", "PATCH")

    def test_header_lookup_is_case_insensitive(self) -> None:
        call = FunctionCall.create("chat", "GET", headers={"authorization": "Bearer t"})
        assert call.header("Authorization") == "Bearer t"
        assert call.header("apikey") is None

    def test_call_is_frozen(self) -> None:
        call = FunctionCall.create("chat", "GET")
        with pytest.raises(ValidationError):
            call.method = "POST"


def test_proxy_result_ok() -> None:
    assert ProxyResult(status_code=204).ok
    assert not ProxyResult(status_code=404).ok
