from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from skui.ui.controls import Control


class ControlManager:
    """Mixin for objects that own child controls (windows and containers)."""

    def __init__(self) -> None:
        super().__init__()
        self._controls: List["Control"] = []

    @property
    def controls(self) -> List["Control"]:
        return self._controls[:]

    def add_control(self, control: "Control") -> "Control":
        if control in self._controls:
            return control
        if control.parent is not None and control.parent is not self:
            control.parent.remove_control(control)
        control.parent = self
        self._controls.append(control)
        # Seite ist schon geladen -> Control direkt im HTML anlegen.
        # Vorher uebernimmt add_container beim Ready-Callback.
        window = getattr(self, "window", None)
        if window is not None and window.ready:
            window.bridge.add_control(control)
            if isinstance(control, ControlManager):
                window.bridge.add_container(control)
        return control

    def remove_control(self, control: "Control") -> bool:
        if control not in self._controls:
            return False
        self._controls.remove(control)
        control.parent = None
        return True

    def iter_controls(self) -> Iterator["Control"]:
        """Depth first walk over all descendants."""
        for control in self._controls:
            yield control
            if isinstance(control, ControlManager):
                yield from control.iter_controls()

    def find_control_by_ui_id(self, ui_id: str) -> Optional["Control"]:
        for control in self.iter_controls():
            if control.ui_id == ui_id:
                return control
        return None

    def find_control_by_name(self, name: str) -> Optional["Control"]:
        for control in self.iter_controls():
            if control.name == name:
                return control
        return None
