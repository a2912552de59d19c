"""Terminal highlighting for tooltip Markdown via Pygments."""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .settings import DEFAULT_STYLE


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=_normalize_style(style))


def highlight_markdown(source: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return ``source`` as ANSI-highlighted Markdown, or unchanged when ``no_color``."""
    if no_color:
        return source
    return highlight(source, MarkdownLexer(), _formatter_for_style(style))


__all__ = ["highlight_markdown"]
