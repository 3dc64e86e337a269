from explainer.core.config import Settings
from explainer.domain.ai.providers.groq import GroqProvider
from explainer.domain.ai.service import AIService


def build_ai_service(settings: Settings) -> AIService:
    return AIService(primary=_build_primary_provider(settings))


def _build_primary_provider(settings: Settings) -> GroqProvider:
    return GroqProvider(
        api_key=settings.groq_api_key,
        model=settings.groq_model,
        base_url=settings.groq_base_url,
        max_tokens=settings.ai_max_tokens,
        temperature=settings.ai_temperature,
        top_p=settings.ai_top_p,
        timeout_sec=settings.ai_request_timeout_sec,
    )
