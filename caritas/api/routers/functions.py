"""
Function proxy API endpoints.

Routes: GET|HEAD|POST|PUT|DELETE|OPTIONS /functions/{function_path}

Dependencies: fastapi, caritas.application.services.gateway_service
System role: Browser-facing proxy to the upstream function host
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from caritas.api.deps import get_function_gateway
from caritas.application.services import CORS_HEADERS, FunctionGateway
from caritas.core.exceptions import ClientPreconditionError
from caritas.models.gateway import BODYLESS_METHODS, FunctionCall
from caritas.observability.log_utils import log_exception_with_context, redact_headers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS"]


def _error_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


async def _read_json_body(request: Request):
    if request.method in BODYLESS_METHODS:
        return None
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ClientPreconditionError("Request body must be valid JSON", field="body") from e


@router.api_route("", methods=PROXY_METHODS, include_in_schema=False)
async def missing_function_path(request: Request) -> Response:
    """Reject calls that name no function."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    return _error_response(400, {"error": "Function path is required"})


@router.api_route("/{function_path:path}", methods=PROXY_METHODS)
async def proxy_function(
    request: Request,
    function_path: str,
    gateway: FunctionGateway = Depends(get_function_gateway),
) -> Response:
    """
    Forward one call to the named upstream function.

    Only the caller's Authorization header travels upstream; the proxy adds
    its own service credentials.

    Args:
        request: Inbound request (method, headers, JSON body)
        function_path: Function name below /functions/v1/, may contain '/'
        gateway: Injected FunctionGateway

    Returns:
        Response: Upstream status and JSON body with permissive CORS headers
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    try:
        call = FunctionCall.create(
            function_path,
            request.method,
            headers=dict(request.headers),
            body=await _read_json_body(request),
        )
    except ClientPreconditionError as e:
        logger.info(
            "Function call rejected",
            extra={"function_path": function_path, "reason": e.message},
        )
        return _error_response(400, {"error": e.message})

    logger.debug(
        "Forwarding function call",
        extra={
            "function": call.target_name,
            "method": call.method,
            "headers": redact_headers(call.headers),
        },
    )

    try:
        result = await gateway.forward(call)
    except Exception as e:
        log_exception_with_context(
            logger,
            "Proxy error",
            e,
            function=call.target_name,
            method=call.method,
        )
        return _error_response(500, {"error": "Internal server error", "message": str(e)})

    if not result.ok:
        logger.info(
            "Upstream function returned an error",
            extra={"function": call.target_name, "status_code": result.status_code},
        )

    if result.body is None:
        return Response(status_code=result.status_code, headers=CORS_HEADERS)
    return JSONResponse(status_code=result.status_code, content=result.body, headers=CORS_HEADERS)
