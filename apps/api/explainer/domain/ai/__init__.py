"""AI domain services and provider abstractions."""

from explainer.domain.ai.factory import build_ai_service
from explainer.domain.ai.service import AIService

__all__ = ["AIService", "build_ai_service"]
