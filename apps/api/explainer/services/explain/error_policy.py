from typing import Any

from fastapi import HTTPException

from explainer.services.explain.errors import ExplainError, UpstreamFailure


SERVER_ERROR_MESSAGE = "Server error"
MAX_DETAIL_CHARS = 300


def _compact(value: Any) -> str:
    return " ".join(str(value or "").split()).strip()


def build_error_detail(exc: ExplainError) -> dict[str, Any]:
    """Client payload for a classified pipeline failure."""
    if isinstance(exc, UpstreamFailure):
        return build_unexpected_error_detail(exc)
    return {"error": _compact(exc.message) or SERVER_ERROR_MESSAGE}


def build_unexpected_error_detail(exc: BaseException) -> dict[str, Any]:
    details = _compact(exc)[:MAX_DETAIL_CHARS] or type(exc).__name__
    return {"error": SERVER_ERROR_MESSAGE, "details": details}


def to_http_exception(exc: ExplainError, headers: dict[str, str] | None = None) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=build_error_detail(exc), headers=headers)


def build_http_error_payload(exc: HTTPException) -> dict[str, Any]:
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        return detail
    # 프레임워크가 직접 던진 HTTPException(404, 405 등)은 문자열 detail을 가진다.
    return {"error": _compact(detail) or SERVER_ERROR_MESSAGE}
