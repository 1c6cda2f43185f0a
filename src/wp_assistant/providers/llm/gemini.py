import logging
from typing import Any

from wp_assistant.config import Settings
from wp_assistant.errors import CompletionError

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Text completions from Gemini through its OpenAI-compatible endpoint."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.model = settings.gemini_model
        self._llm: Any | None = None

    async def complete(self, prompt: str) -> str:
        llm = self._get_llm()
        response = await llm.ainvoke(prompt)
        return self._message_text(getattr(response, "content", response))

    def _get_llm(self):
        if self._llm is None:
            if not self.settings.gemini_api_key:
                raise CompletionError("GEMINI_API_KEY is not configured")

            from langchain_openai import ChatOpenAI

            self._llm = ChatOpenAI(
                model=self.model,
                api_key=self.settings.gemini_api_key,
                base_url=self.settings.gemini_base_url,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=self.settings.llm_num_retries,
            )
            logger.info("llm.client model=%s base_url=%s", self.model, self.settings.gemini_base_url)
        return self._llm

    @staticmethod
    def _message_text(content: Any) -> str:
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            parts: list[str] = []
            for item in content:
                if isinstance(item, dict) and "text" in item:
                    parts.append(str(item["text"]))
                else:
                    parts.append(str(item))
            return "\n".join(parts).strip()
        return str(content).strip()
