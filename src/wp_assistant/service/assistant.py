import logging
from collections.abc import Mapping
from typing import Any

from wp_assistant.errors import (
    AssistantError,
    CompletionError,
    InvalidRequestError,
    OutOfScopeError,
)
from wp_assistant.prompts.templates import PromptMode
from wp_assistant.routing.classifier import is_in_scope
from wp_assistant.theme.packager import build_archive
from wp_assistant.workflow.assistant import AssistantResult, AssistantWorkflow

logger = logging.getLogger(__name__)


class AssistantService:
    def __init__(self, workflow: AssistantWorkflow | None = None) -> None:
        self.workflow = workflow or AssistantWorkflow()

    async def ask(self, prompt: Any) -> dict[str, str]:
        """Plain Q&A behind the topic gate; raises ``AssistantError`` subclasses."""
        query = self._validate_prompt(prompt)
        if not is_in_scope(query):
            logger.info("ask.rejected reason=out_of_scope chars=%d", len(query))
            raise OutOfScopeError()
        try:
            result = await self.workflow.run(query, mode=PromptMode.QA)
        except AssistantError:
            raise
        except Exception as exc:
            logger.exception("ask.failed")
            raise CompletionError(str(exc) or None) from exc
        return {"answer": result.answer}

    async def assist(self, prompt: Any) -> AssistantResult:
        """Full interactive flow: theme intent first, then the topic gate.

        Failures are reported on the returned result instead of raised.
        """
        query = prompt if isinstance(prompt, str) else ""
        try:
            query = self._validate_prompt(prompt)
            if not query.strip():
                raise InvalidRequestError()
            result = await self.workflow.run(query)
        except AssistantError as exc:
            logger.info("assist.rejected type=%s", exc.__class__.__name__)
            return AssistantResult(query=query, error=exc)
        except Exception as exc:
            logger.exception("assist.failed")
            return AssistantResult(query=query, error=CompletionError(str(exc) or None))

        if result.mode is PromptMode.GENERATE:
            logger.info("assist.theme files=%d names=%s", len(result.files), list(result.files))
        return result

    def build_theme_archive(self, files: Mapping[str, str]) -> bytes:
        return build_archive(files)

    @staticmethod
    def _validate_prompt(prompt: Any) -> str:
        if not isinstance(prompt, str) or not prompt:
            raise InvalidRequestError()
        return prompt
