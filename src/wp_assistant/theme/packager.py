import io
import logging
import posixpath
import re
import zipfile
from collections.abc import Mapping

from wp_assistant.errors import EmptyFileSetError, PackagingError
from wp_assistant.prompts.templates import FILE_MARKER

logger = logging.getLogger(__name__)

ARCHIVE_FILE_NAME = "wordpress-theme.zip"
PLACEHOLDER_NAME = "screenshot.txt"
PLACEHOLDER_CONTENT = """<?php
// This is a placeholder for screenshot.png
// Replace this file with an actual 1200x900 PNG screenshot of your theme
?>"""

_MARKER_PREFIX = re.compile(rf"\A{re.escape(FILE_MARKER)}\s*")
_DRIVE_PREFIX = re.compile(r"\A[A-Za-z]:")


def clean_entry_name(name: str) -> str:
    return _MARKER_PREFIX.sub("", name).strip()


def safe_entry_name(name: str) -> str | None:
    """Relative, forward-slash form of ``name``; None when it would escape the archive root."""
    candidate = name.replace("\\", "/")
    if candidate.startswith("/") or _DRIVE_PREFIX.match(candidate):
        return None
    parts = [part for part in candidate.split("/") if part not in ("", ".")]
    if not parts or ".." in parts:
        return None
    return posixpath.join(*parts)


def build_archive(files: Mapping[str, str]) -> bytes:
    """Zip ``files`` plus the screenshot placeholder into an in-memory archive.

    Names are re-cleaned of any leading marker; when two names collapse onto the
    same entry the later one wins. Raises ``EmptyFileSetError`` for an empty
    mapping and ``PackagingError`` for any serialization fault.
    """
    if not files:
        raise EmptyFileSetError()

    entries: dict[str, str] = {}
    for raw_name, content in files.items():
        name = clean_entry_name(raw_name)
        if not name:
            logger.warning("archive.skip reason=empty_name raw=%r", raw_name)
            continue
        safe_name = safe_entry_name(name)
        if safe_name is None:
            logger.warning("archive.skip reason=unsafe_path name=%s", name)
            continue
        name = safe_name
        if name == PLACEHOLDER_NAME:
            logger.warning("archive.skip reason=reserved_name name=%s", name)
            continue
        entries[name] = content.strip()

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            for name, content in entries.items():
                archive.writestr(name, content)
            archive.writestr(PLACEHOLDER_NAME, PLACEHOLDER_CONTENT)
    except (OSError, ValueError, MemoryError, zipfile.BadZipFile) as exc:
        logger.error("archive.failed type=%s detail=%s", exc.__class__.__name__, exc)
        raise PackagingError() from exc

    blob = buffer.getvalue()
    logger.info("archive.built entries=%d bytes=%d", len(entries) + 1, len(blob))
    return blob
