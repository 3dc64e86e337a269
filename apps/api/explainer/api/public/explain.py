import json
import logging
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Request, Response

from explainer.services.explain import pipeline
from explainer.services.explain.error_policy import build_unexpected_error_detail, to_http_exception
from explainer.services.explain.errors import ExplainError, ValidationError
from explainer.services.explain.validator import validate_request


router = APIRouter(prefix="/api", tags=["public"])
logger = logging.getLogger(__name__)

SESSION_HEADER = "x-session-id"


def _resolve_session_id(request: Request, body: Any) -> str:
    header_value = request.headers.get(SESSION_HEADER, "").strip()
    if header_value:
        return header_value
    if isinstance(body, dict):
        body_value = body.get("sessionId")
        if isinstance(body_value, str) and body_value.strip():
            return body_value.strip()
    return uuid4().hex


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Request body must be valid JSON") from exc


def _session_headers(request: Request, body: Any, session_id: str | None) -> dict[str, str]:
    return {"X-Session-Id": session_id or _resolve_session_id(request, body)}


@router.post("/chatai")
async def explain(request: Request, response: Response) -> dict[str, Any]:
    body: Any = None
    session_id: str | None = None
    try:
        body = await _read_json_body(request)
        session_id = _resolve_session_id(request, body)
        response.headers["X-Session-Id"] = session_id
        explain_request = validate_request(body)
        # 검증을 통과한 요청만 세션 메모리를 만든다.
        memory = pipeline.get_memory_registry().for_session(session_id)
        return await pipeline.explain(explain_request, memory=memory)
    except ExplainError as exc:
        raise to_http_exception(exc, headers=_session_headers(request, body, session_id)) from exc
    except Exception as exc:
        logger.exception("explain_unexpected_error")
        raise HTTPException(
            status_code=500,
            detail=build_unexpected_error_detail(exc),
            headers=_session_headers(request, body, session_id),
        ) from exc
