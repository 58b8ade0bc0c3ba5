from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

from skui.qt import Qt, QtCore, QtWebChannel, QtWebEngineCore, QtWebEngineWidgets, QtWidgets, Slot
from skui.services.host import ActionCallback
from skui.utils.logger import get_logger

QDialog = QtWidgets.QDialog
QVBoxLayout = QtWidgets.QVBoxLayout
QWebEngineView = QtWebEngineWidgets.QWebEngineView
QWebEngineSettings = QtWebEngineCore.QWebEngineSettings
QWebChannel = QtWebChannel.QWebChannel
QSettings = QtCore.QSettings

SETTINGS_ORGANIZATION = "SKUI"
SETTINGS_APPLICATION = "SKUI"
CHANNEL_OBJECT = "skui"


class _ActionChannel(QtCore.QObject):
    """Object published to the page as ``skui``; JS calls ``skui.invoke(name, params)``."""

    def __init__(self, dialog: "HtmlDialog") -> None:
        super().__init__(dialog)
        self._dialog = dialog

    @Slot(str, str)
    def invoke(self, name: str, params: str) -> None:
        self._dialog.dispatch_action(name, params)


class HtmlDialog(QDialog):
    """Dialog showing a local HTML file in an embedded Qt WebEngine view."""

    def __init__(
        self,
        dialog_title: str = "",
        preferences_key: Optional[str] = None,
        resizable: bool = True,
        scrollable: bool = True,
        left: Optional[int] = None,
        top: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        minimize: bool = False,
        maximize: bool = False,
        parent=None,
    ):
        super().__init__(parent)
        self.log = get_logger(__name__)
        self._preferences_key = preferences_key
        self._resizable = resizable
        self._callbacks: Dict[str, ActionCallback] = {}

        self.setWindowTitle(dialog_title)
        self.setWindowFlag(Qt.WindowType.WindowMinimizeButtonHint, minimize)
        self.setWindowFlag(Qt.WindowType.WindowMaximizeButtonHint, maximize)

        self._view = QWebEngineView(self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self._view)

        self._channel_object = _ActionChannel(self)
        self._channel = QWebChannel(self._view.page())
        self._channel.registerObject(CHANNEL_OBJECT, self._channel_object)
        self._view.page().setWebChannel(self._channel)

        self._view.settings().setAttribute(QWebEngineSettings.WebAttribute.ShowScrollBars, scrollable)

        if left is not None and top is not None:
            self.move(left, top)
        if width is not None and height is not None:
            self.resize(width, height)
        self._restore_preferences()

    # ---------- Einstellungen ----------
    def _settings(self) -> QSettings:
        return QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)

    def _restore_preferences(self) -> None:
        if not self._preferences_key:
            return
        geometry = self._settings().value(f"{self._preferences_key}/geometry")
        if geometry is not None:
            self.restoreGeometry(geometry)

    def _save_preferences(self) -> None:
        if not self._preferences_key:
            return
        self._settings().setValue(f"{self._preferences_key}/geometry", self.saveGeometry())

    def closeEvent(self, event):
        self._save_preferences()
        super().closeEvent(event)

    def done(self, result):
        # Escape schliesst ueber reject() ohne closeEvent
        self._save_preferences()
        super().done(result)

    # ---------- Callbacks ----------
    def add_action_callback(self, name: str, callback: ActionCallback) -> None:
        self._callbacks[name] = callback

    def dispatch_action(self, name: str, params: str) -> None:
        callback = self._callbacks.get(name)
        if callback is None:
            self.log.warning("no action callback for %s", name, extra={"source": "dialog"})
            return
        callback(self, params)

    def execute_script(self, script: str) -> None:
        self._view.page().runJavaScript(script)

    # ---------- Fenster ----------
    def set_file(self, path: str) -> None:
        self._view.setUrl(QtCore.QUrl.fromLocalFile(str(Path(path).resolve())))

    def set_size(self, width: int, height: int) -> None:
        if self._resizable:
            self.resize(width, height)
        else:
            self.setFixedSize(width, height)

    def set_position(self, left: int, top: int) -> None:
        self.move(left, top)

    def get_client_size(self) -> Tuple[int, int]:
        return self._view.width(), self._view.height()

    def set_min_width(self, value: int) -> None:
        self.setMinimumWidth(value)

    def set_max_width(self, value: int) -> None:
        self.setMaximumWidth(value)

    def set_min_height(self, value: int) -> None:
        self.setMinimumHeight(value)

    def set_max_height(self, value: int) -> None:
        self.setMaximumHeight(value)

    def is_visible(self) -> bool:
        return self.isVisible()

    def bring_to_front(self) -> None:
        self.raise_()
        self.activateWindow()

    def show_modal(self) -> None:
        if sys.platform == "darwin":
            # Kein echtes Modal: Fenster bleibt nur ueber der Anwendung
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)
        else:
            self.setWindowModality(Qt.WindowModality.ApplicationModal)
        self.show()

    def write_image(self, image_path: str, top_left_x: int, top_left_y: int,
                    bottom_right_x: int, bottom_right_y: int) -> None:
        region = QtCore.QRect(
            top_left_x,
            top_left_y,
            bottom_right_x - top_left_x,
            bottom_right_y - top_left_y,
        )
        pixmap = self._view.grab(region)
        if not pixmap.save(str(image_path)):
            self.log.warning("could not write image to %s", image_path, extra={"source": "dialog"})

    def set_full_security(self, enabled: bool) -> None:
        settings = self._view.settings()
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, not enabled)
        settings.setAttribute(QWebEngineSettings.WebAttribute.JavascriptCanOpenWindows, not enabled)
        settings.setAttribute(QWebEngineSettings.WebAttribute.PluginsEnabled, not enabled)
