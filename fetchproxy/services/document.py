"""
Document service - loads the startup README and renders it to HTML.
"""
from __future__ import annotations

import markdown

from fetchproxy.logging import get_logger

logger = get_logger(__name__)

FALLBACK_DOCUMENT = "# Error\nCould not load README content."


def load_document(path: str) -> str:
    """
    Read the README served on the root route.

    Never raises: a missing or unreadable file is logged and replaced
    by FALLBACK_DOCUMENT so startup always completes.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading {path}: {e}")
        return FALLBACK_DOCUMENT


def render_document(text: str) -> str:
    """Convert Markdown text to an HTML fragment."""
    return markdown.markdown(text)
