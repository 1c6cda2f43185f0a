import logging
from dataclasses import dataclass, field
from typing import Any, TypedDict

from wp_assistant.config import Settings, get_settings
from wp_assistant.errors import AssistantError, OutOfScopeError
from wp_assistant.prompts.templates import PromptMode, build_prompt
from wp_assistant.providers.llm.gemini import GeminiProvider
from wp_assistant.routing.classifier import route
from wp_assistant.theme.extractor import extract_files

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000


@dataclass
class AssistantResult:
    """Everything one ask produces; owned by the caller, never shared."""

    query: str
    mode: PromptMode | None = None
    answer: str = ""
    files: dict[str, str] = field(default_factory=dict)
    error: AssistantError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def has_files(self) -> bool:
        return bool(self.files)

    def as_payload(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value if self.mode else None,
            "answer": self.answer,
            "files": dict(self.files),
        }


class WorkflowState(TypedDict):
    query: str
    mode: str
    prompt: str
    answer: str
    files: dict[str, str]


class AssistantWorkflow:
    """prompt -> complete -> (extract) implemented with LangGraph nodes."""

    def __init__(self, settings: Settings | None = None, llm_provider: GeminiProvider | None = None) -> None:
        self.settings = settings or get_settings()
        self.llm_provider = llm_provider or GeminiProvider(self.settings)
        self._graph: Any | None = None

    async def run(self, query: str, mode: PromptMode | None = None) -> AssistantResult:
        resolved = mode or route(query)
        if resolved is None:
            raise OutOfScopeError()

        try:
            final_state = await self._get_graph().ainvoke(
                {
                    "query": query,
                    "mode": resolved.value,
                    "prompt": "",
                    "answer": "",
                    "files": {},
                }
            )
        except Exception as exc:
            logger.error(
                "llm.error model=%s type=%s detail=%s",
                self.llm_provider.model,
                exc.__class__.__name__,
                self._extract_error_detail(exc),
            )
            raise

        return AssistantResult(
            query=query,
            mode=resolved,
            answer=str(final_state.get("answer", "")),
            files=dict(final_state.get("files") or {}),
        )

    def _get_graph(self):
        if self._graph is None:
            from langgraph.graph import END, START, StateGraph

            graph = StateGraph(WorkflowState)
            graph.add_node("prompt_step", self._prompt_node)
            graph.add_node("complete_step", self._complete_node)
            graph.add_node("extract_step", self._extract_node)
            graph.add_edge(START, "prompt_step")
            graph.add_edge("prompt_step", "complete_step")
            graph.add_conditional_edges(
                "complete_step",
                self._after_complete,
                {"extract": "extract_step", "done": END},
            )
            graph.add_edge("extract_step", END)
            self._graph = graph.compile()
        return self._graph

    async def _prompt_node(self, state: WorkflowState) -> dict[str, str]:
        prompt = build_prompt(state["query"], PromptMode(state["mode"]))
        return {"prompt": prompt}

    async def _complete_node(self, state: WorkflowState) -> dict[str, str]:
        logger.info(
            "llm.request mode=%s model=%s chars=%d query=%s",
            state["mode"],
            self.llm_provider.model,
            len(state["prompt"]),
            self._clip(state["query"], self.settings.log_preview_chars),
        )
        text = await self.llm_provider.complete(state["prompt"])
        logger.info(
            "llm.response mode=%s model=%s chars=%d preview=%s",
            state["mode"],
            self.llm_provider.model,
            len(text),
            self._clip(text, self.settings.log_preview_chars),
        )
        return {"answer": text}

    async def _extract_node(self, state: WorkflowState) -> dict[str, dict[str, str]]:
        return {"files": extract_files(state["answer"])}

    @staticmethod
    def _after_complete(state: WorkflowState) -> str:
        return "extract" if state["mode"] == PromptMode.GENERATE.value else "done"

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    def _extract_error_detail(self, exc: Exception) -> str:
        status_code = getattr(exc, "status_code", None)
        message = getattr(exc, "message", None) or str(exc)
        body = getattr(exc, "body", None)
        details = [f"status_code={status_code}" if status_code is not None else ""]
        if body is not None:
            details.append(f"body={body}")
        details.append(f"message={message}")
        return self._clip(" ".join([part for part in details if part]).strip(), ERROR_LOG_LIMIT)
