"""Logging setup for front ends hosting the CORTEX engine."""

import logging
from typing import List, Optional

from config.settings import GameSettings

# In-memory log buffer for a UI debug panel
UI_LOG_BUFFER: List[str] = []
MAX_UI_LOG_LINES = 500

_LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class UILogHandler(logging.Handler):
    """Logging handler that keeps a rolling buffer of recent logs for the UI."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # noqa: BLE001
            msg = record.getMessage()

        UI_LOG_BUFFER.append(msg)
        # Keep only the last N lines
        if len(UI_LOG_BUFFER) > MAX_UI_LOG_LINES:
            del UI_LOG_BUFFER[:-MAX_UI_LOG_LINES]


def setup_logging(settings: Optional[GameSettings] = None) -> UILogHandler:
    """Configure root logging and attach the UI buffer handler.

    Safe to call more than once; only one buffer handler is ever attached.
    """
    settings = settings or GameSettings()
    level = getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=_LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler, UILogHandler):
            handler.setLevel(level)
            return handler

    ui_handler = UILogHandler()
    ui_handler.setLevel(level)
    ui_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(ui_handler)
    return ui_handler


def get_ui_logs() -> str:
    """Return recent log lines for display in the UI debug panel."""
    if not UI_LOG_BUFFER:
        return "No logs captured yet. Interact with the game to generate logs."
    return "\n".join(UI_LOG_BUFFER[-MAX_UI_LOG_LINES:])


def clear_ui_logs() -> None:
    UI_LOG_BUFFER.clear()
