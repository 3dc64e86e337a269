import json
import logging
from typing import Any
from urllib import error, request


logger = logging.getLogger(__name__)


class GroqProvider:
    """OpenAI-compatible chat completion client (Groq by default)."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        max_tokens: int = 400,
        temperature: float = 0.5,
        top_p: float = 1.0,
        timeout_sec: int = 30,
    ) -> None:
        if not api_key:
            raise ValueError("groq_api_key_missing")
        if not base_url:
            raise ValueError("groq_base_url_missing")

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p
        self.timeout_sec = timeout_sec

    def build_payload(self, *, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
        }

    def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        endpoint = f"{self.base_url}/chat/completions"
        payload = self.build_payload(system_prompt=system_prompt, user_prompt=user_prompt)

        req = request.Request(
            endpoint,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            method="POST",
        )

        try:
            with request.urlopen(req, timeout=self.timeout_sec) as response:
                body = response.read().decode("utf-8")
        except error.HTTPError as exc:
            # 오류 응답 본문에는 choices가 없으므로 빈 텍스트로 처리된다.
            body = exc.read().decode("utf-8", errors="replace")
            logger.warning("groq_http_error: status=%s model=%s", exc.code, self.model)
        except Exception as exc:  # pragma: no cover - network boundary
            raise RuntimeError(f"groq_request_failed:{exc}") from exc

        try:
            decoded = json.loads(body)
        except ValueError:
            logger.warning("groq_response_not_json: length=%s", len(body))
            return ""
        return self._extract_text(decoded)

    @staticmethod
    def _extract_text(response_json: Any) -> str:
        if not isinstance(response_json, dict):
            return ""
        choices = response_json.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""

        first = choices[0]
        message = first.get("message", {}) if isinstance(first, dict) else {}
        content = message.get("content") if isinstance(message, dict) else None

        if isinstance(content, str):
            return content

        if isinstance(content, list):
            texts: list[str] = []
            for part in content:
                if isinstance(part, dict):
                    text = part.get("text")
                    if isinstance(text, str) and text.strip():
                        texts.append(text)
            return "\n".join(texts)

        return ""
