from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as SchemaError


logger = logging.getLogger(__name__)


class ReplySchema(BaseModel):
    """Strict shape a model reply must match to count as structured."""

    model_config = ConfigDict(extra="ignore", strict=True)

    explanation: str
    summary: str | None = None
    roadmap: Any = None

    @field_validator("summary", mode="before")
    @classmethod
    def drop_non_text_summary(cls, value: Any) -> Any:
        # summary는 선택 필드라 타입이 틀려도 응답 전체를 버리지 않는다.
        return value if isinstance(value, str) else None


@dataclass(frozen=True)
class ParsedReply:
    explanation: str
    summary: str | None = None
    roadmap: Any = None
    degraded: bool = False


@dataclass(frozen=True)
class DegradedReply:
    explanation: str
    summary: None = None
    roadmap: None = None
    degraded: bool = True


ParseResult = Union[ParsedReply, DegradedReply]


def extract_json_candidate(text: str) -> str | None:
    """Return the span from the first "{" to the last "}" or None."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def parse_reply(text: str | None) -> ParseResult:
    raw = text if isinstance(text, str) else ""

    candidate = extract_json_candidate(raw)
    if candidate is None:
        return DegradedReply(explanation=raw)

    try:
        decoded = json.loads(candidate)
    except (ValueError, RecursionError):
        logger.info("reply_not_json: falling back to raw text")
        return DegradedReply(explanation=raw)

    if not isinstance(decoded, dict):
        return DegradedReply(explanation=raw)

    try:
        validated = ReplySchema.model_validate(decoded)
    except SchemaError as exc:
        logger.info("reply_schema_mismatch: %s", exc.error_count())
        return DegradedReply(explanation=raw)

    summary = validated.summary.strip() if validated.summary else None
    return ParsedReply(
        explanation=validated.explanation,
        summary=summary or None,
        roadmap=validated.roadmap,
    )
