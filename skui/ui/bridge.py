"""Message bridge between the dialog's HTML/JS and the Python side.

Inbound, the page invokes one of three named callbacks (see
:class:`CallbackKind`). Event callbacks carry a payload of the form
``"<ui_id>||<event>"`` or ``"<ui_id>||<event>||arg1,arg2,..."``.

Outbound, :meth:`Bridge.call` evaluates a JS function call in the page. The page
queues its event callbacks and only sends the next one after the Python side
answers with ``Bridge.pump_message``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

from skui.ui.control_manager import ControlManager
from skui.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from skui.services.host import NativeDialog
    from skui.ui.controls import Control

SEPARATOR = "||"
CONSOLE_ID = "Console"


class CallbackKind(str, Enum):
    READY = "SKUI_Window_Ready"
    EVENT = "SKUI_Event_Callback"
    OPEN_URL = "SKUI_Open_URL"


@dataclass(frozen=True)
class EventMessage:
    ui_id: str
    event: str
    args: Optional[str] = None

    def arguments(self) -> List[str]:
        if not self.args:
            return []
        values = self.args.split(",")
        # "10,20," -> ["10", "20"]
        while values and values[-1] == "":
            values.pop()
        return values


def parse_event_callback(params: str) -> EventMessage:
    parts = (params or "").split(SEPARATOR, 2)
    if len(parts) < 2 or not parts[1]:
        raise ValueError(f"malformed event callback payload: {params!r}")
    ui_id, event = parts[0], parts[1]
    args = parts[2] if len(parts) > 2 else None
    return EventMessage(ui_id=ui_id, event=event, args=args)


def to_js(value: Any) -> str:
    if hasattr(value, "to_js"):
        return value.to_js()
    return json.dumps(value, ensure_ascii=False)


class Bridge:
    def __init__(self, window, dialog: "NativeDialog") -> None:
        self.window = window
        self.dialog = dialog
        self.log = get_logger(__name__)

    def call(self, function: str, *args: Any) -> None:
        script = f"{function}({', '.join(to_js(arg) for arg in args)});"
        self.dialog.execute_script(script)

    def add_control(self, control: "Control") -> None:
        self.call("UI.add_control", control.properties())

    def add_container(self, container: ControlManager) -> None:
        for control in container.controls:
            self.add_control(control)
            if isinstance(control, ControlManager):
                self.add_container(control)

    def pump_message(self) -> None:
        self.call("Bridge.pump_message")
