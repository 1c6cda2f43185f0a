#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    import sys

    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from wp_assistant.errors import AssistantError  # noqa: E402
from wp_assistant.prompts.templates import FILE_MARKER  # noqa: E402
from wp_assistant.service.assistant import AssistantService  # noqa: E402
from wp_assistant.theme.packager import ARCHIVE_FILE_NAME  # noqa: E402
from wp_assistant.workflow.assistant import AssistantResult  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ask a WordPress question or generate a theme, e.g. 'Create a theme for a restaurant website'.",
    )
    parser.add_argument("question", nargs="+", help="Question or theme request.")
    parser.add_argument(
        "--download",
        nargs="?",
        const=ARCHIVE_FILE_NAME,
        default="",
        help=f"Write generated theme files to a zip archive (default name: {ARCHIVE_FILE_NAME}).",
    )
    return parser.parse_args()


def render(result: AssistantResult) -> str:
    if result.error is not None:
        return f"[error] {result.error.message}"
    if not result.has_files:
        return result.answer
    lines = [f"Theme generated successfully! Found {len(result.files)} files.", ""]
    for name, content in result.files.items():
        lines.extend([f"{FILE_MARKER} {name}", "-" * 40, content, ""])
    return "\n".join(lines)


def write_archive(service: AssistantService, result: AssistantResult, path: Path) -> int:
    try:
        blob = service.build_theme_archive(result.files)
    except AssistantError as exc:
        print(f"[error] {exc.message}")
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(blob)
    print(f"[wp-assistant] archive={path} bytes={len(blob)}")
    return 0


async def main() -> int:
    args = parse_args()
    service = AssistantService()
    result = await service.assist(" ".join(args.question))
    print(render(result))
    if not result.ok:
        return 1
    if args.download and result.has_files:
        return write_archive(service, result, Path(args.download))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
