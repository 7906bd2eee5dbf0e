"""
Document upload and processing orchestrator.

Validates a batch of user files, then for every file (concurrently)
stores the blob and asks the remote processing function to work on it.
Per-file failures are captured as outcomes; the batch always settles into
one ordered CombinedResult.

Dependencies: caritas.boundary, caritas.core.upload_rules
System role: Multi-document processing orchestration
"""

import asyncio
import logging
from typing import Protocol, Sequence

import httpx

from caritas.boundary.upstream.function_client import UpstreamFunctionClient
from caritas.core.exceptions import (
    CaritasException,
    ClientPreconditionError,
    TransportError,
    UpstreamError,
)
from caritas.core.upload_rules import (
    MAX_TOTAL_BYTES,
    StorageKeyFactory,
    check_total_size,
    validate_owner_id,
    validate_upload_batch,
)
from caritas.models.documents import CombinedResult, UploadBlob, UploadJob, UploadOutcome

logger = logging.getLogger(__name__)


class DocumentStorage(Protocol):
    """Blob storage accepting keyed uploads."""

    async def put(self, key: str, data: bytes, content_type: str = ...) -> None: ...


class ProcessingFailure(Exception):
    """Raised inside a job when the remote function does not deliver a result."""


def _reason(exc: Exception) -> str:
    """User-facing reason without structured details."""
    if isinstance(exc, CaritasException):
        return exc.message
    return str(exc) or type(exc).__name__


class DocumentProcessingOrchestrator:
    """
    Orchestrates upload + remote processing for a batch of documents.

    Jobs in a batch are independent: each is started before any is
    awaited, and one failing or slow file never cancels its siblings.
    """

    def __init__(
        self,
        storage: DocumentStorage,
        functions: UpstreamFunctionClient,
        process_function: str = "process-document",
        max_total_bytes: int = MAX_TOTAL_BYTES,
        key_factory: StorageKeyFactory | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            storage: Storage collaborator for raw uploads
            functions: Client for the upstream function host
            process_function: Name of the remote processing function
            max_total_bytes: Inclusive size ceiling for one batch
            key_factory: Storage key source (monotonic clock by default)
        """
        self.storage = storage
        self.functions = functions
        self.process_function = process_function
        self.max_total_bytes = max_total_bytes
        self.key_factory = key_factory or StorageKeyFactory()

    def check_request(
        self,
        instruction: str,
        owner_id: str | None,
        declared_bytes: int = 0,
    ) -> None:
        """
        Checks that need no file content: identity, instruction, declared size.

        Routes call this before reading uploads so an oversized request is
        rejected without buffering it.

        Raises:
            ClientPreconditionError: On the first failed check
        """
        if not owner_id:
            raise ClientPreconditionError(
                "You must be logged in to use this feature", field="owner_id"
            )
        validate_owner_id(owner_id)
        if not instruction or not instruction.strip():
            raise ClientPreconditionError(
                "Please enter an instruction for your documents", field="instruction"
            )
        check_total_size(declared_bytes, self.max_total_bytes)

    def _check_preconditions(
        self,
        files: Sequence[UploadBlob],
        instruction: str,
        owner_id: str | None,
    ) -> None:
        self.check_request(instruction, owner_id)
        validate_upload_batch(files, self.max_total_bytes)

    async def process_documents(
        self,
        files: Sequence[UploadBlob],
        instruction: str,
        owner_id: str | None,
        authorization: str | None = None,
    ) -> CombinedResult:
        """
        Upload and process every file, then combine the outcomes.

        Args:
            files: Files submitted together, in display order
            instruction: What the remote function should do with each file
            owner_id: Caller identity (storage scope and function input)
            authorization: Caller Authorization header, forwarded upstream

        Returns:
            CombinedResult: One outcome per file, in input order

        Raises:
            ClientPreconditionError: Before any I/O, if the batch is unusable
        """
        self._check_preconditions(files, instruction, owner_id)

        jobs = [
            UploadJob(
                blob=blob,
                owner_id=owner_id,
                instruction=instruction,
                storage_key=self.key_factory.new_key(owner_id, blob.file_name),
            )
            for blob in files
        ]

        logger.info(
            "Processing document batch",
            extra={"owner_id": owner_id, "file_count": len(jobs)},
        )

        # gather preserves argument order regardless of completion order
        outcomes = await asyncio.gather(
            *(self._run_job(job, authorization) for job in jobs)
        )
        result = CombinedResult(outcomes=list(outcomes))

        logger.info(
            "Document batch settled",
            extra={
                "owner_id": owner_id,
                "succeeded": result.succeeded_count,
                "failed": result.failed_count,
            },
        )
        return result

    async def _run_job(self, job: UploadJob, authorization: str | None) -> UploadOutcome:
        """Run one job; every error is converted into a failed outcome."""
        name = job.blob.file_name

        try:
            await self.storage.put(job.storage_key, job.blob.data, job.blob.content_type)
        except Exception as e:
            logger.warning(
                "Upload failed",
                extra={"file_name": name, "s3_key": job.storage_key, "error": str(e)},
            )
            return UploadOutcome(
                source_file_name=name,
                succeeded=False,
                text=f"Error uploading {name}: {_reason(e)}",
            )

        try:
            text = await self._process(job, authorization)
        except Exception as e:
            logger.warning(
                "Processing failed",
                extra={"file_name": name, "s3_key": job.storage_key, "error": str(e)},
            )
            return UploadOutcome(
                source_file_name=name,
                succeeded=False,
                text=f"Error processing {name}: {_reason(e)}",
            )

        return UploadOutcome(source_file_name=name, succeeded=True, text=text)

    async def _process(self, job: UploadJob, authorization: str | None) -> str:
        """Invoke the remote processing function for one stored file."""
        try:
            response = await self.functions.invoke(
                self.process_function,
                {
                    "filePath": job.storage_key,
                    "title": job.blob.title,
                    "userId": job.owner_id,
                    "prompt": job.instruction,
                },
                authorization=authorization,
            )
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise UpstreamError(
                f"Upstream function error: {response.status_code} {response.reason_phrase}".rstrip(),
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProcessingFailure("Invalid response format from document processing service") from e

        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, str) or not result.strip():
            raise ProcessingFailure("Invalid response format from document processing service")
        return result
