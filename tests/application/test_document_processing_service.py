"""
Test suite for DocumentProcessingOrchestrator.

Storage and the upstream function client are AsyncMocks; upstream
responses are real httpx.Response objects.

System role: Verification of batch upload/processing orchestration
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from caritas.application.services.document_processing_service import (
    DocumentProcessingOrchestrator,
)
from caritas.boundary.aws.s3_client import StorageUploadError
from caritas.boundary.upstream.function_client import UpstreamFunctionClient
from caritas.core.exceptions import ClientPreconditionError
from caritas.core.upload_rules import StorageKeyFactory

MB = 1024 * 1024


@pytest.fixture
def storage() -> AsyncMock:
    """Provide mock document storage."""
    return AsyncMock()


@pytest.fixture
def functions() -> AsyncMock:
    """Provide mock upstream client echoing the processed title."""
    client = AsyncMock(spec=UpstreamFunctionClient)

    async def invoke(name, payload, authorization=None):
        return httpx.Response(200, json={"result": f"summary of {payload['title']}"})

    client.invoke.side_effect = invoke
    return client


@pytest.fixture
def orchestrator(storage, functions) -> DocumentProcessingOrchestrator:
    return DocumentProcessingOrchestrator(
        storage=storage,
        functions=functions,
        key_factory=StorageKeyFactory(clock=lambda: 1700000000.0),
    )


class TestPreconditions:
    """Rejections happen before any storage or upstream call."""

    @pytest.mark.asyncio
    async def test_missing_owner(self, orchestrator, storage, blob_factory) -> None:
        with pytest.raises(ClientPreconditionError, match="You must be logged in"):
            await orchestrator.process_documents([blob_factory("a.pdf")], "Summarize", None)
        storage.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_with_path_segments(self, orchestrator, storage, blob_factory) -> None:
        with pytest.raises(ClientPreconditionError) as exc_info:
            await orchestrator.process_documents([blob_factory("a.pdf")], "Summarize", "../victim")
        assert exc_info.value.message == "Invalid user identity"
        storage.put.assert_not_awaited()

    def test_check_request_uses_declared_size(self, orchestrator) -> None:
        orchestrator.check_request("Summarize", "user-1", 20 * MB)
        with pytest.raises(ClientPreconditionError) as exc_info:
            orchestrator.check_request("Summarize", "user-1", 20 * MB + 1)
        assert exc_info.value.message == "Total file size exceeds 20MB limit"

    @pytest.mark.asyncio
    async def test_blank_instruction(self, orchestrator, storage, blob_factory) -> None:
        with pytest.raises(ClientPreconditionError) as exc_info:
            await orchestrator.process_documents([blob_factory("a.pdf")], "   ", "user-1")
        assert exc_info.value.message == "Please enter an instruction for your documents"
        storage.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_files(self, orchestrator, storage, functions) -> None:
        with pytest.raises(ClientPreconditionError) as exc_info:
            await orchestrator.process_documents([], "Summarize", "user-1")
        assert exc_info.value.message == "Please upload at least one document"
        storage.put.assert_not_awaited()
        functions.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_file_rejects_whole_batch(self, orchestrator, storage, blob_factory) -> None:
        blobs = [
            blob_factory("a.pdf", size=5 * MB),
            blob_factory("b.exe", content_type="application/x-msdownload"),
        ]

        with pytest.raises(ClientPreconditionError, match="Unsupported file format: b.exe"):
            await orchestrator.process_documents(blobs, "Summarize", "user-1")
        storage.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oversized_batch(self, orchestrator, storage, blob_factory) -> None:
        with pytest.raises(ClientPreconditionError, match="Total file size exceeds 20MB limit"):
            await orchestrator.process_documents(
                [blob_factory("a.pdf", size=21 * MB)], "Summarize", "user-1"
            )
        storage.put.assert_not_awaited()


class TestProcessDocuments:
    """Test suite for the happy path and per-file failures."""

    @pytest.mark.asyncio
    async def test_all_files_succeed_in_input_order(self, orchestrator, storage, functions, blob_factory) -> None:
        blobs = [blob_factory("a.pdf"), blob_factory("b.txt", content_type="text/plain")]

        result = await orchestrator.process_documents(
            blobs, "Summarize", "user-1", authorization="Bearer user"
        )

        assert [o.source_file_name for o in result.outcomes] == ["a.pdf", "b.txt"]
        assert result.text == "summary of a\n\nsummary of b"
        assert result.succeeded_count == 2

        keys = [c.args[0] for c in storage.put.await_args_list]
        assert keys == ["user-1/1700000000000_a.pdf", "user-1/1700000000001_b.txt"]

        name, payload = functions.invoke.await_args_list[0].args
        assert name == "process-document"
        assert payload == {
            "filePath": "user-1/1700000000000_a.pdf",
            "title": "a",
            "userId": "user-1",
            "prompt": "Summarize",
        }
        assert functions.invoke.await_args_list[0].kwargs["authorization"] == "Bearer user"

    @pytest.mark.asyncio
    async def test_upload_failure_is_captured_per_file(self, orchestrator, storage, functions, blob_factory) -> None:
        async def put(key, data, content_type):
            if "b.pdf" in key:
                raise StorageUploadError("Access Denied")

        storage.put.side_effect = put
        blobs = [blob_factory("a.pdf"), blob_factory("b.pdf"), blob_factory("c.pdf")]

        result = await orchestrator.process_documents(blobs, "Summarize", "user-1")

        assert len(result) == 3
        assert [o.succeeded for o in result.outcomes] == [True, False, True]
        assert result.outcomes[1].text == "Error uploading b.pdf: Access Denied"
        assert functions.invoke.await_count == 2

    @pytest.mark.asyncio
    async def test_upstream_non_2xx_is_captured(self, orchestrator, functions, blob_factory) -> None:
        functions.invoke.side_effect = None
        functions.invoke.return_value = httpx.Response(502)

        result = await orchestrator.process_documents([blob_factory("a.pdf")], "Summarize", "user-1")

        assert result.failed_count == 1
        assert result.outcomes[0].text == "Error processing a.pdf: Upstream function error: 502 Bad Gateway"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"result": ""}, {"result": 42}, ["result"]])
    async def test_malformed_result_is_captured(self, orchestrator, functions, blob_factory, body) -> None:
        functions.invoke.side_effect = None
        functions.invoke.return_value = httpx.Response(200, json=body)

        result = await orchestrator.process_documents([blob_factory("a.pdf")], "Summarize", "user-1")

        assert result.outcomes[0].text == (
            "Error processing a.pdf: Invalid response format from document processing service"
        )

    @pytest.mark.asyncio
    async def test_transport_error_is_captured(self, orchestrator, functions, blob_factory) -> None:
        functions.invoke.side_effect = httpx.ConnectError("connection refused")

        result = await orchestrator.process_documents([blob_factory("a.pdf")], "Summarize", "user-1")

        assert result.outcomes[0].text == "Error processing a.pdf: connection refused"

    @pytest.mark.asyncio
    async def test_jobs_start_before_any_completes(self, storage, functions, blob_factory) -> None:
        in_flight = 0
        peak = 0

        async def put(key, data, content_type):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        storage.put.side_effect = put
        orchestrator = DocumentProcessingOrchestrator(storage=storage, functions=functions)

        await orchestrator.process_documents(
            [blob_factory(f"{i}.pdf") for i in range(4)], "Summarize", "user-1"
        )

        assert peak == 4

    @pytest.mark.asyncio
    async def test_repeat_runs_use_distinct_keys(self, storage, functions, blob_factory) -> None:
        orchestrator = DocumentProcessingOrchestrator(storage=storage, functions=functions)
        blobs = [blob_factory("a.pdf")]

        await orchestrator.process_documents(blobs, "Summarize", "user-1")
        await orchestrator.process_documents(blobs, "Summarize", "user-1")

        keys = [c.args[0] for c in storage.put.await_args_list]
        assert len(set(keys)) == 2
