from __future__ import annotations

import itertools
import json
from typing import Any, Dict, Optional

from skui.ui.base import Base
from skui.ui.control_manager import ControlManager

_ui_ids = itertools.count(1)


class Control(Base):
    """A widget tracked by ``ui_id``; its markup is produced by the HTML side."""

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__()
        self.ui_id = f"UI_{next(_ui_ids)}"
        self.name = name
        self.parent: Optional[ControlManager] = None
        self.enabled = True
        self.visible = True

    @property
    def window(self):
        parent = self.parent
        return getattr(parent, "window", None) if parent is not None else None

    def properties(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "ui_id": self.ui_id,
            "parent": getattr(self.parent, "ui_id", None),
            "name": self.name,
            "enabled": self.enabled,
            "visible": self.visible,
        }

    def to_js(self) -> str:
        return json.dumps(self.ui_id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.ui_id} name={self.name!r}>"


class Label(Control):
    def __init__(self, caption: str = "", name: Optional[str] = None) -> None:
        super().__init__(name)
        self.caption = caption

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props["caption"] = self.caption
        return props


class Button(Control):
    EVENTS = ("click",)

    def __init__(self, caption: str = "", name: Optional[str] = None) -> None:
        super().__init__(name)
        self.caption = caption

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props["caption"] = self.caption
        return props


class Container(Control, ControlManager):
    """Groups child controls; rendered as a block element."""
