from functools import lru_cache
import logging
from typing import Any

from pydantic import BaseModel

from explainer.core.config import get_settings
from explainer.domain.ai import AIService, build_ai_service
from explainer.services.explain.errors import ConfigError, UpstreamFailure
from explainer.services.explain.memory import MemoryStore, SessionMemoryRegistry
from explainer.services.explain.prompts import compose_prompts
from explainer.services.explain.response_parser import ParseResult, parse_reply
from explainer.services.explain.roadmap import RoadmapStep, normalize_roadmap
from explainer.services.explain.validator import ExplainRequest, validate_request


logger = logging.getLogger(__name__)
settings = get_settings()


class BotReply(BaseModel):
    summary: str | None = None
    explanation: str
    roadmap: list[RoadmapStep] | None = None


@lru_cache(maxsize=1)
def _get_ai_service() -> AIService:
    return build_ai_service(settings)


def _require_ai_service() -> AIService:
    try:
        return _get_ai_service()
    except Exception as exc:
        reason = ai_error_detail(exc)
        logger.error("ai_service_init_failed: %s", reason)
        if "api_key_missing" in reason:
            raise ConfigError("Server misconfiguration: missing GROQ_API_KEY") from exc
        raise ConfigError(f"Server misconfiguration: {reason}") from exc


@lru_cache(maxsize=1)
def get_memory_registry() -> SessionMemoryRegistry:
    return SessionMemoryRegistry(
        capacity=settings.memory_window,
        scope=settings.memory_scope,
        max_sessions=settings.memory_max_sessions,
    )


def ai_error_detail(exc: Exception) -> str:
    message = str(exc).strip()
    if not message:
        return "ai_provider_failed"
    return message[:300]


def build_bot_reply(result: ParseResult, *, want_roadmap: bool) -> BotReply:
    roadmap = None
    if want_roadmap and result.roadmap is not None:
        roadmap = normalize_roadmap(result.roadmap)
    return BotReply(
        summary=result.summary,
        explanation=result.explanation,
        roadmap=roadmap,
    )


async def run_explain(raw_payload: Any, *, memory: MemoryStore) -> dict[str, Any]:
    return await explain(validate_request(raw_payload), memory=memory)


async def explain(request: ExplainRequest, *, memory: MemoryStore) -> dict[str, Any]:
    ai_service = _require_ai_service()

    history = memory.recent()
    system_prompt, user_prompt = compose_prompts(request, history)
    logger.info(
        "explain_request: mode=%s roadmap=%s history=%s",
        request.mode.value,
        request.wantRoadmap,
        len(history),
    )

    try:
        raw_reply = await ai_service.complete(system_prompt=system_prompt, user_prompt=user_prompt)
    except Exception as exc:
        reason = ai_error_detail(exc)
        logger.error("explain_upstream_failed: %s", reason)
        raise UpstreamFailure(reason) from exc

    result = parse_reply(raw_reply)
    if result.degraded:
        logger.warning("explain_reply_degraded: length=%s", len(raw_reply))

    memory.append(request.message, raw_reply)
    reply = build_bot_reply(result, want_roadmap=request.wantRoadmap)
    return reply.model_dump(exclude_none=True)
