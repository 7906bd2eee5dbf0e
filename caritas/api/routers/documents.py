"""
Document processing API endpoints.

Routes: POST /documents/process

Dependencies: caritas.application.services.document_processing_service,
    caritas.application.services.history_service
System role: Multi-document upload + processing HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Header, UploadFile

from caritas.api.deps import get_document_orchestrator, get_history_recorder
from caritas.application.services import DocumentProcessingOrchestrator, HistoryRecorder
from caritas.models.documents import ProcessDocumentsResponse, UploadBlob
from caritas.models.history import HistoryCategory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


async def _to_blob(file: UploadFile) -> UploadBlob:
    return UploadBlob(
        file_name=file.filename or "document",
        content_type=file.content_type or "",
        data=await file.read(),
    )


def _history_metadata(blobs: list[UploadBlob]) -> str:
    names = ", ".join(blob.file_name for blob in blobs)
    return f"Processed {len(blobs)} document(s): {names}"


@router.post("/process", response_model=ProcessDocumentsResponse)
async def process_documents(
    background_tasks: BackgroundTasks,
    files: list[UploadFile] | None = File(default=None),
    instruction: str = Form(default=""),
    owner_id: str | None = Form(default=None),
    authorization: str | None = Header(default=None),
    orchestrator: DocumentProcessingOrchestrator = Depends(get_document_orchestrator),
    recorder: HistoryRecorder = Depends(get_history_recorder),
) -> ProcessDocumentsResponse:
    """
    Upload a batch of documents and process each with one instruction.

    Per-file failures are reported inside the result; the request itself
    only fails (400) when the batch is rejected before any upload. The
    declared sizes are checked before any file content is read. History is
    recorded only when at least one file was processed.

    Args:
        background_tasks: FastAPI background tasks (history recording)
        files: Uploaded files (multipart form, repeated ``files`` field)
        instruction: What to do with every document
        owner_id: Identity of the signed-in user
        authorization: Caller Authorization header, forwarded upstream
        orchestrator: Injected DocumentProcessingOrchestrator
        recorder: Injected HistoryRecorder

    Returns:
        ProcessDocumentsResponse: Combined text plus per-file outcomes

    Raises:
        ClientPreconditionError: Mapped to 400 by the app exception handler
    """
    uploads = files or []
    orchestrator.check_request(
        instruction, owner_id, sum(upload.size or 0 for upload in uploads)
    )
    blobs = [await _to_blob(upload) for upload in uploads]

    logger.info(
        "Document processing request received",
        extra={"owner_id": owner_id, "file_names": [b.file_name for b in blobs]},
    )

    combined = await orchestrator.process_documents(
        blobs,
        instruction=instruction,
        owner_id=owner_id,
        authorization=authorization,
    )

    if combined.succeeded_count > 0:
        background_tasks.add_task(
            recorder.record,
            owner_id,
            instruction,
            combined.text,
            HistoryCategory.COURSE_TUTOR,
            _history_metadata(blobs),
        )

    return ProcessDocumentsResponse.from_result(combined)
