"""The surface of the host application that windows rely on.

A host builds native dialogs and opens URLs. ``Window`` only talks to these
protocols; the Qt implementation lives in :mod:`skui.services.html_dialog` and
is imported on first use so the window layer stays importable without Qt.
"""
from __future__ import annotations

import sys
from typing import Callable, Optional, Protocol, Tuple

ActionCallback = Callable[["NativeDialog", str], None]


class NativeDialog(Protocol):
    def set_size(self, width: int, height: int) -> None: ...
    def set_position(self, left: int, top: int) -> None: ...
    def bring_to_front(self) -> None: ...
    def close(self) -> None: ...
    def is_visible(self) -> bool: ...
    def show(self) -> None: ...
    def show_modal(self) -> None: ...
    def write_image(self, image_path: str, top_left_x: int, top_left_y: int,
                    bottom_right_x: int, bottom_right_y: int) -> None: ...
    def set_file(self, path: str) -> None: ...
    def add_action_callback(self, name: str, callback: ActionCallback) -> None: ...
    def execute_script(self, script: str) -> None: ...
    def get_client_size(self) -> Tuple[int, int]: ...
    def set_min_width(self, value: int) -> None: ...
    def set_max_width(self, value: int) -> None: ...
    def set_min_height(self, value: int) -> None: ...
    def set_max_height(self, value: int) -> None: ...


class Host(Protocol):
    platform_is_osx: bool

    def create_dialog(self, **options) -> NativeDialog: ...
    def open_url(self, url: str) -> None: ...


class QtHost:
    """Host backed by a Qt application with Qt WebEngine dialogs."""

    def __init__(self) -> None:
        self.platform_is_osx = sys.platform == "darwin"
        self._app = None

    def application(self):
        from skui.qt import Qt, QtCore, QtWidgets

        app = QtWidgets.QApplication.instance()
        if app is None:
            # Qt WebEngine verlangt geteilte GL Kontexte vor der QApplication
            QtCore.QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)
            app = QtWidgets.QApplication(sys.argv)
        self._app = app
        return app

    def create_dialog(self, **options) -> NativeDialog:
        from skui.services.html_dialog import HtmlDialog

        self.application()
        return HtmlDialog(**options)

    def open_url(self, url: str) -> None:
        from skui.qt import QtCore, QtGui

        QtGui.QDesktopServices.openUrl(QtCore.QUrl(url))


_default_host: Optional[QtHost] = None


def default_host() -> QtHost:
    global _default_host
    if _default_host is None:
        _default_host = QtHost()
    return _default_host
