"""Compatibility layer that switches between PySide6 and PyQt6.

This module centralises the Qt binding selection so the Qt host can stay
agnostic and rely on a consistent API surface. The binding can be forced via
the ``SKUI_QT_API`` environment variable (``pyside6`` or ``pyqt6``). When unset
the loader tries PySide6 first and then PyQt6.

Only the Qt host imports this module; the window and control layer never does.
"""
from __future__ import annotations

import os
from typing import Tuple

QT_API_ENV = os.environ.get("SKUI_QT_API", "").strip().lower()

if QT_API_ENV == "pyqt6":
    _BINDING_PREFERENCE: Tuple[str, ...] = ("PyQt6", "PySide6")
else:
    _BINDING_PREFERENCE = ("PySide6", "PyQt6")

QT_BINDING: str | None = None
QtCore = QtGui = QtWidgets = None  # type: ignore[assignment]
QtWebEngineWidgets = QtWebEngineCore = QtWebChannel = None  # type: ignore[assignment]
Signal = Slot = None  # type: ignore[assignment]
_ERRORS: list[tuple[str, Exception]] = []

for name in _BINDING_PREFERENCE:
    try:
        if name == "PySide6":  # pragma: no cover - exercised with a real display
            from PySide6 import QtCore as _QtCore  # type: ignore
            from PySide6 import QtGui as _QtGui  # type: ignore
            from PySide6 import QtWidgets as _QtWidgets  # type: ignore
            from PySide6 import QtWebEngineWidgets as _QtWebEngineWidgets  # type: ignore
            from PySide6 import QtWebEngineCore as _QtWebEngineCore  # type: ignore
            from PySide6 import QtWebChannel as _QtWebChannel  # type: ignore
            Signal = _QtCore.Signal
            Slot = _QtCore.Slot
        else:  # pragma: no cover
            from PyQt6 import QtCore as _QtCore  # type: ignore
            from PyQt6 import QtGui as _QtGui  # type: ignore
            from PyQt6 import QtWidgets as _QtWidgets  # type: ignore
            from PyQt6 import QtWebEngineWidgets as _QtWebEngineWidgets  # type: ignore
            from PyQt6 import QtWebEngineCore as _QtWebEngineCore  # type: ignore
            from PyQt6 import QtWebChannel as _QtWebChannel  # type: ignore
            Signal = _QtCore.pyqtSignal  # type: ignore[attr-defined]
            Slot = _QtCore.pyqtSlot  # type: ignore[attr-defined]
    except Exception as exc:  # pragma: no cover - import-time errors surface locally
        _ERRORS.append((name, exc))
        continue

    QtCore = _QtCore
    QtGui = _QtGui
    QtWidgets = _QtWidgets
    QtWebEngineWidgets = _QtWebEngineWidgets
    QtWebEngineCore = _QtWebEngineCore
    QtWebChannel = _QtWebChannel
    QT_BINDING = name
    break

if QT_BINDING is None:  # pragma: no cover - makes failures easier to diagnose locally
    details = ", ".join(f"{name}: {exc}" for name, exc in _ERRORS) or "none"
    raise ImportError(
        "SKUI requires PySide6 or PyQt6 (with Qt WebEngine and Qt WebChannel). "
        "Unable to import any binding. Details: " + details
    )

Qt = QtCore.Qt  # type: ignore[assignment]

__all__ = [
    "QtCore",
    "QtGui",
    "QtWidgets",
    "QtWebEngineWidgets",
    "QtWebEngineCore",
    "QtWebChannel",
    "Qt",
    "Signal",
    "Slot",
    "QT_BINDING",
]
