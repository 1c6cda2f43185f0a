import asyncio

import pytest

from wp_assistant.errors import (
    CompletionError,
    EmptyFileSetError,
    InvalidRequestError,
    OutOfScopeError,
)
from wp_assistant.prompts.templates import PromptMode
from wp_assistant.service.assistant import AssistantService
from wp_assistant.workflow.assistant import AssistantResult


class _FakeWorkflow:
    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc
        self.calls: list[tuple[str, PromptMode | None]] = []

    async def run(self, query: str, mode: PromptMode | None = None) -> AssistantResult:
        self.calls.append((query, mode))
        if self.exc is not None:
            raise self.exc
        if mode is None and "theme for" in query.lower():
            return AssistantResult(query=query, mode=PromptMode.GENERATE, answer="raw", files={"style.css": "x"})
        if mode is None and "wordpress" not in query.lower():
            raise OutOfScopeError()
        return AssistantResult(query=query, mode=mode or PromptMode.QA, answer=f"answer to {query}")


def _service(workflow: _FakeWorkflow) -> AssistantService:
    return AssistantService(workflow=workflow)  # type: ignore[arg-type]


@pytest.mark.parametrize("prompt", [None, "", 42, ["wordpress"], {"prompt": "wp"}])
def test_ask_rejects_invalid_prompt_without_calling_workflow(prompt) -> None:
    workflow = _FakeWorkflow()
    with pytest.raises(InvalidRequestError):
        asyncio.run(_service(workflow).ask(prompt))
    assert workflow.calls == []


def test_ask_rejects_off_topic_without_calling_workflow() -> None:
    workflow = _FakeWorkflow()
    with pytest.raises(OutOfScopeError):
        asyncio.run(_service(workflow).ask("What is the capital of France?"))
    assert workflow.calls == []


def test_ask_uses_qa_mode_even_for_theme_requests() -> None:
    workflow = _FakeWorkflow()
    result = asyncio.run(_service(workflow).ask("Create a theme for a WordPress blog"))
    assert result == {"answer": "answer to Create a theme for a WordPress blog"}
    assert workflow.calls == [("Create a theme for a WordPress blog", PromptMode.QA)]


def test_ask_wraps_provider_failure() -> None:
    workflow = _FakeWorkflow(exc=RuntimeError("503 upstream unavailable"))
    with pytest.raises(CompletionError) as excinfo:
        asyncio.run(_service(workflow).ask("wordpress hooks"))
    assert excinfo.value.message == "503 upstream unavailable"


def test_ask_wraps_silent_provider_failure_with_generic_message() -> None:
    workflow = _FakeWorkflow(exc=RuntimeError())
    with pytest.raises(CompletionError) as excinfo:
        asyncio.run(_service(workflow).ask("wordpress hooks"))
    assert excinfo.value.message == CompletionError.default_message


def test_assist_returns_theme_files() -> None:
    result = asyncio.run(_service(_FakeWorkflow()).assist("Build a theme for a bakery"))
    assert result.ok
    assert result.mode is PromptMode.GENERATE
    assert result.files == {"style.css": "x"}


def test_assist_reports_errors_on_result() -> None:
    invalid = asyncio.run(_service(_FakeWorkflow()).assist(None))
    assert isinstance(invalid.error, InvalidRequestError)

    off_topic = asyncio.run(_service(_FakeWorkflow()).assist("pasta recipes"))
    assert isinstance(off_topic.error, OutOfScopeError)
    assert off_topic.answer == "" and off_topic.files == {}

    failed = asyncio.run(_service(_FakeWorkflow(exc=RuntimeError("boom"))).assist("wordpress"))
    assert isinstance(failed.error, CompletionError)
    assert failed.error.message == "boom"


def test_build_theme_archive_requires_files() -> None:
    with pytest.raises(EmptyFileSetError):
        _service(_FakeWorkflow()).build_theme_archive({})
    assert _service(_FakeWorkflow()).build_theme_archive({"style.css": "x"})[:2] == b"PK"


@pytest.mark.parametrize("prompt", ["   ", "\n\t"])
def test_assist_treats_blank_prompt_as_invalid(prompt: str) -> None:
    workflow = _FakeWorkflow()
    result = asyncio.run(_service(workflow).assist(prompt))
    assert isinstance(result.error, InvalidRequestError)
    assert workflow.calls == []


def test_ask_keeps_blank_prompt_for_topic_gate() -> None:
    with pytest.raises(OutOfScopeError):
        asyncio.run(_service(_FakeWorkflow()).ask("   "))
