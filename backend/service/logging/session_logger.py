"""
Session Logger — per-session logging for workflow editing sessions.

Wraps the ``service.session`` logger in a ``LoggerAdapter`` that prefixes
every record with the session id, so interleaved sessions stay readable
in a shared log.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Optional, Tuple

_BASE_LOGGER_NAME = "service.session"


class SessionLogger(logging.LoggerAdapter):
    """Logger adapter carrying the session id."""

    def __init__(self, session_id: str, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(logger or logging.getLogger(_BASE_LOGGER_NAME), {"session_id": session_id})
        self.session_id = session_id

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any],
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("session_id", self.session_id)
        kwargs["extra"] = extra
        return f"[{self.session_id}] {msg}", kwargs


_session_loggers: Dict[str, SessionLogger] = {}


def get_session_logger(session_id: str) -> SessionLogger:
    """Return the cached logger for ``session_id``."""
    if session_id not in _session_loggers:
        _session_loggers[session_id] = SessionLogger(session_id)
    return _session_loggers[session_id]


def release_session_logger(session_id: str) -> None:
    _session_loggers.pop(session_id, None)
