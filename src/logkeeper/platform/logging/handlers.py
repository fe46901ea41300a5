"""Rich console handler for logkeeper diagnostics.

Where: platform/logging/handlers.py
What: Render diagnostics with level-specific colours and an optional prefix.
Why: Echoed debug lines should recede while warnings and errors stand out.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class LevelStyledRichHandler(RichHandler):
    """Rich handler that colours the whole message by severity."""

    _LEVEL_STYLES: ClassVar[dict[int, Style]] = {
        logging.DEBUG: Style(color="bright_black"),
        logging.INFO: Style(),
        logging.WARNING: Style(color="yellow"),
        logging.ERROR: Style(color="red"),
        logging.CRITICAL: Style(color="red", bold=True),
    }
    _LEVEL_PREFIXES: ClassVar[dict[int, str]] = {
        logging.WARNING: "Warning: ",
        logging.ERROR: "Error: ",
        logging.CRITICAL: "Fatal: ",
    }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    @classmethod
    def style_for(cls, levelno: int) -> Style:
        """Return the style used for ``levelno`` (nearest lower known level)."""

        known = [level for level in sorted(cls._LEVEL_STYLES) if level <= levelno]
        if not known:
            return cls._LEVEL_STYLES[logging.DEBUG]
        return cls._LEVEL_STYLES[known[-1]]

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        prefix = self._LEVEL_PREFIXES.get(record.levelno, "")
        if message.startswith(prefix):
            prefix = ""
        return Text(prefix + message, style=self.style_for(record.levelno))


__all__ = ["LevelStyledRichHandler"]
