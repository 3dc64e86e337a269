"""LLM completion providers."""

from explainer.domain.ai.providers.groq import GroqProvider

__all__ = ["GroqProvider"]
