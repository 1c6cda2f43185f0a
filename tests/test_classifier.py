import logging

import pytest

from wp_assistant.prompts.templates import PromptMode
from wp_assistant.routing.classifier import (
    THEME_INTENT_PHRASES,
    WORDPRESS_KEYWORDS,
    is_in_scope,
    route,
    wants_generation,
)


def test_keyword_list_shape() -> None:
    assert len(WORDPRESS_KEYWORDS) == 30
    assert all(keyword == keyword.lower() for keyword in WORDPRESS_KEYWORDS)


@pytest.mark.parametrize("keyword", WORDPRESS_KEYWORDS)
def test_every_keyword_is_accepted_in_any_case(keyword: str) -> None:
    assert is_in_scope(f"Question about {keyword.upper()} please")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "What is the capital of France?",
        "Recommend a good pasta recipe",
        "How tall is Mount Everest?",
    ],
)
def test_unrelated_text_is_rejected(text: str) -> None:
    assert is_in_scope(text) is False
    assert wants_generation(text) is False
    assert route(text) is None


def test_substring_match_has_no_word_boundaries() -> None:
    assert is_in_scope("How are bank transaction fees calculated?")
    assert is_in_scope("Which coffee filter is best?")


@pytest.mark.parametrize("phrase", THEME_INTENT_PHRASES)
def test_theme_intent_phrases(phrase: str) -> None:
    assert wants_generation(f"Please {phrase.title()} a bakery")


def test_route_prefers_generation() -> None:
    assert route("Create a theme for a restaurant website") is PromptMode.GENERATE
    assert route("How do I use wp_enqueue_script?") is PromptMode.QA


def test_theme_intent_bypasses_topic_gate(monkeypatch) -> None:
    # "make theme" also contains "theme", so drop the keyword list to prove the bypass
    monkeypatch.setattr("wp_assistant.routing.classifier.WORDPRESS_KEYWORDS", ())
    assert is_in_scope("make theme for my bakery") is False
    assert route("make theme for my bakery") is PromptMode.GENERATE


def test_route_logs_decision(caplog) -> None:
    with caplog.at_level(logging.INFO):
        route("hello there")
    assert any("route.decided mode=reject" in record.getMessage() for record in caplog.records)
