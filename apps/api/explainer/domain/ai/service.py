import logging

from starlette.concurrency import run_in_threadpool

from explainer.domain.ai.providers.base import CompletionProvider


logger = logging.getLogger(__name__)


class AIService:
    def __init__(self, *, primary: CompletionProvider) -> None:
        self.primary = primary

    def complete_sync(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            text = self.primary.complete(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
            )
        except Exception as primary_exc:
            raise RuntimeError(f"ai_primary_failed:{primary_exc}") from primary_exc
        if not text:
            logger.warning("ai_empty_completion")
        return text or ""

    async def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        # 블로킹 HTTP 호출은 스레드풀에서 실행해 이벤트 루프를 막지 않는다.
        return await run_in_threadpool(
            self.complete_sync,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )
