from enum import Enum
from typing import Any

from pydantic import BaseModel

from explainer.services.explain.errors import ValidationError


class Mode(str, Enum):
    ELI5 = "eli5"
    NORMAL = "normal"
    EXPERT = "expert"


VALID_MODES: tuple[str, ...] = tuple(mode.value for mode in Mode)


class ExplainRequest(BaseModel):
    message: str
    mode: Mode
    wantRoadmap: bool = False


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def validate_request(raw: Any) -> ExplainRequest:
    if not isinstance(raw, dict):
        raise ValidationError("Request body must be a JSON object")

    message = raw.get("message")
    if not isinstance(message, str) or not message.strip():
        raise ValidationError("Missing or empty 'message' in request body")

    mode = raw.get("mode")
    if mode not in VALID_MODES:
        raise ValidationError(f"Invalid 'mode'. Must be one of: {', '.join(VALID_MODES)}")

    return ExplainRequest(
        message=message.strip(),
        mode=Mode(mode),
        wantRoadmap=_coerce_flag(raw.get("wantRoadmap")),
    )
