"""Test doubles for the host application and its native dialogs."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple


class FakeDialog:
    """Records every call the window makes on a native dialog."""

    def __init__(self, **options: Any) -> None:
        self.options = options
        self.calls: List[Tuple[Any, ...]] = []
        self.callbacks: Dict[str, Any] = {}
        self.scripts: List[str] = []
        self.visible = False
        self.file: Optional[str] = None
        # Groesse die get_client_size meldet; None = zuletzt gesetzte Groesse
        self.client_size: Optional[Tuple[int, int]] = None
        self._size = (options.get("width") or 0, options.get("height") or 0)

    def calls_named(self, name: str) -> List[Tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    def set_size(self, width, height):
        self.calls.append(("set_size", width, height))
        self._size = (width, height)

    def set_position(self, left, top):
        self.calls.append(("set_position", left, top))

    def bring_to_front(self):
        self.calls.append(("bring_to_front",))

    def close(self):
        self.calls.append(("close",))
        self.visible = False

    def is_visible(self):
        return self.visible

    def show(self):
        self.calls.append(("show",))
        self.visible = True

    def show_modal(self):
        self.calls.append(("show_modal",))
        self.visible = True

    def write_image(self, *args):
        self.calls.append(("write_image",) + args)

    def set_file(self, path):
        self.calls.append(("set_file", path))
        self.file = path

    def add_action_callback(self, name, callback):
        self.callbacks[name] = callback

    def execute_script(self, script):
        self.scripts.append(script)

    def get_client_size(self):
        return self.client_size if self.client_size is not None else self._size

    def set_min_width(self, value):
        self.calls.append(("set_min_width", value))

    def set_max_width(self, value):
        self.calls.append(("set_max_width", value))

    def set_min_height(self, value):
        self.calls.append(("set_min_height", value))

    def set_max_height(self, value):
        self.calls.append(("set_max_height", value))

    def set_full_security(self, enabled):
        self.calls.append(("set_full_security", enabled))

    # Wie die Seite einen Callback ausloest
    def fire(self, name: str, params: str = "") -> None:
        self.callbacks[name](self, params)


class NavigatingDialog(FakeDialog):
    """Dialog that also offers browser navigation buttons."""

    def set_navigation_buttons_enabled(self, enabled):
        self.calls.append(("set_navigation_buttons_enabled", enabled))


class FakeHost:
    def __init__(self, platform_is_osx: bool = False, dialog_class=FakeDialog) -> None:
        self.platform_is_osx = platform_is_osx
        self.dialog_class = dialog_class
        self.dialogs: List[FakeDialog] = []
        self.opened_urls: List[str] = []

    def create_dialog(self, **options: Any) -> FakeDialog:
        dialog = self.dialog_class(**options)
        self.dialogs.append(dialog)
        return dialog

    def open_url(self, url: str) -> None:
        self.opened_urls.append(url)
