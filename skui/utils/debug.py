# skui/utils/debug.py
"""Debug console sink for messages coming from the HTML side.

``console.log`` calls inside a dialog are forwarded as ``Console`` events and
end up here. They are written to the ``skui.console`` logger so they share the
regular log files and the in-memory ring buffer.
"""
from __future__ import annotations

import logging

from skui.utils.logger import get_logger

_log = get_logger("skui.console", source="console")
_enabled = False


def set_enabled(enabled: bool) -> None:
    global _enabled
    _enabled = bool(enabled)


def is_enabled() -> bool:
    return _enabled


def puts(*messages) -> None:
    level = logging.INFO if _enabled else logging.DEBUG
    for message in messages:
        _log.log(level, "%s", message)
