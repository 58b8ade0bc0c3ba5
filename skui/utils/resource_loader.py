"""Helpers to access bundled assets regardless of runtime environment.

The HTML bootstrap, its script and the theme stylesheets ship inside the
``skui`` package. During development they live on the filesystem next to the
sources, while zipped or frozen plugin bundles only expose them through
:func:`pkgutil.get_data`. In that case the files are materialised into a
temporary directory because the embedded browser needs real paths.
"""

from __future__ import annotations

import atexit
import shutil
import tempfile
from pathlib import Path, PurePosixPath
from pkgutil import get_data
from typing import Dict, Optional

PACKAGE_NAME = "skui"
MODULE_ROOT = Path(__file__).resolve().parent.parent

WINDOW_HTML = "assets/html/window.html"
# Dateien die window.html relativ nachlaedt
_HTML_SIBLINGS = ("assets/js/skui.js",)

_TEMP_ROOT: Optional[Path] = None
_PATH_CACHE: Dict[str, Path] = {}


def _temp_root() -> Path:
    global _TEMP_ROOT
    if _TEMP_ROOT is None:
        _TEMP_ROOT = Path(tempfile.mkdtemp(prefix="skui_assets_"))
        atexit.register(shutil.rmtree, _TEMP_ROOT, ignore_errors=True)
    return _TEMP_ROOT


def _normalise(relative: str) -> str:
    return str(PurePosixPath(relative))


def get_resource_path(relative: str) -> Optional[Path]:
    """Materialise ``relative`` resource file and return a filesystem path."""

    rel = _normalise(relative)

    candidate = MODULE_ROOT / rel
    if candidate.exists():
        return candidate

    if rel in _PATH_CACHE and _PATH_CACHE[rel].exists():
        return _PATH_CACHE[rel]

    try:
        data = get_data(PACKAGE_NAME, rel)
    except OSError:
        data = None
    if data is None:
        return None

    target = _temp_root() / rel
    target.parent.mkdir(parents=True, exist_ok=True)
    if not target.exists():
        target.write_bytes(data)

    _PATH_CACHE[rel] = target
    return target


def window_html_path() -> Optional[Path]:
    """Path of the HTML entry point loaded into every dialog."""

    for sibling in _HTML_SIBLINGS:
        get_resource_path(sibling)
    return get_resource_path(WINDOW_HTML)


def theme_path(theme: Optional[str]) -> Optional[Path]:
    """Resolve a theme name to a stylesheet; bundled themes win over plain paths."""

    if not theme:
        return None
    bundled = get_resource_path(f"assets/css/{theme}")
    if bundled is not None:
        return bundled
    path = Path(theme).expanduser()
    return path if path.is_file() else None
