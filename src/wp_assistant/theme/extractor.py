"""Split a structured theme completion into a ``{file name: content}`` mapping.

The model is asked to emit files as::

    📄 style.css
    body { ... }
    📄 index.php
    <?php ... ?>

A marker is followed by optional whitespace (newlines included), then the rest
of that line is the file name and everything up to the next marker, or the end
of the input, is the body. The scan is a small state machine over a lazy
stream of line pieces, so adversarial input cannot trigger regex backtracking.
"""

import logging
import re
from collections.abc import Iterator
from enum import Enum

from wp_assistant.prompts.templates import FILE_MARKER

logger = logging.getLogger(__name__)

_LINE = re.compile(r"[^\n]*\n|[^\n]+")
_OPENING_FENCE = re.compile(r"\A```[A-Za-z0-9_]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\Z")


class _State(Enum):
    SEEKING_MARKER = "seeking_marker"
    READING_NAME = "reading_name"
    READING_BODY = "reading_body"


def _pieces(raw: str) -> Iterator[str | None]:
    """Yield text pieces that never span a newline; ``None`` stands for a marker."""
    for match in _LINE.finditer(raw):
        parts = match.group(0).split(FILE_MARKER)
        for index, part in enumerate(parts):
            if index:
                yield None
            if part:
                yield part


def _is_line_break(piece: str) -> bool:
    return piece.endswith("\n")


def strip_fences(content: str) -> str:
    """Drop a leading ```lang line and a trailing ``` from already trimmed content."""
    content = _OPENING_FENCE.sub("", content, count=1)
    return _CLOSING_FENCE.sub("", content, count=1)


def extract_files(raw: str) -> dict[str, str]:
    files: dict[str, str] = {}
    state = _State.SEEKING_MARKER
    name_parts: list[str] = []
    body_parts: list[str] = []
    skipping_space = False

    def commit() -> None:
        name = "".join(name_parts).strip()
        content = strip_fences("".join(body_parts).strip())
        if name and content:
            if name in files:
                logger.info("extract.duplicate name=%s", name)
            files[name] = content

    for piece in _pieces(raw):
        if state is _State.SEEKING_MARKER:
            if piece is None:
                state = _State.READING_NAME
                name_parts, skipping_space = [], True
            continue

        if state is _State.READING_NAME:
            if piece is None:
                # a marker inside the name line is part of the name
                name_parts.append(FILE_MARKER)
                skipping_space = False
                continue
            if skipping_space:
                stripped = piece.lstrip()
                if not stripped:
                    continue
                piece, skipping_space = stripped, False
            name_parts.append(piece)
            if _is_line_break(piece):
                state = _State.READING_BODY
                body_parts = []
            continue

        if piece is None:
            commit()
            state = _State.READING_NAME
            name_parts, skipping_space = [], True
        else:
            body_parts.append(piece)

    # a name line cut off by end of input has no body and is dropped
    if state is _State.READING_BODY:
        commit()

    logger.info("extract.files count=%d chars=%d", len(files), len(raw))
    return files
