from typing import Protocol


class CompletionProvider(Protocol):
    """LLM provider contract that returns the raw completion text."""

    def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        ...
