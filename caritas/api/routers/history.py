"""
History API endpoints.

Routes: POST /history

Dependencies: caritas.application.services.history_service
System role: Interaction history HTTP API
"""

from fastapi import APIRouter, BackgroundTasks, Depends, status

from caritas.api.deps import get_history_recorder
from caritas.application.services import HistoryRecorder
from caritas.models.history import RecordHistoryRequest, RecordHistoryResponse

router = APIRouter(prefix="/history", tags=["history"])


@router.post(
    "",
    response_model=RecordHistoryResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def record_history(
    request: RecordHistoryRequest,
    background_tasks: BackgroundTasks,
    recorder: HistoryRecorder = Depends(get_history_recorder),
) -> RecordHistoryResponse:
    """
    Record an interaction performed through the function gateway.

    Accepted immediately; persistence happens after the response is sent
    and its failures are only logged.
    """
    background_tasks.add_task(
        recorder.record,
        request.user_id,
        request.query,
        request.answer,
        request.category,
        request.metadata,
    )
    return RecordHistoryResponse()
