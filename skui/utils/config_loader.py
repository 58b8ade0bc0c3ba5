# skui/utils/config_loader.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields, replace
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Union

log = logging.getLogger(__name__)

THEME_DEFAULT = "theme_os.css"

# =========================
# Datenklassen
# =========================


class SizeLimit(NamedTuple):
    """Minimum and optional maximum for one window dimension."""

    minimum: int = 0
    maximum: Optional[int] = None


# An int is a maximum only, a pair defines minimum and maximum.
Limit = Union[int, SizeLimit, tuple, list, None]


@dataclass
class WindowOptions:
    title: str = "Untitled"

    left: int = 400
    top: int = 250
    width: int = 300
    height: int = 200

    width_limit: Limit = None
    height_limit: Limit = None

    resizable: bool = False
    minimize: bool = False
    maximize: bool = False

    modal: bool = False

    preferences_key: Optional[str] = None     # Host Einstellungen fuer Position und Groesse

    theme: Optional[str] = THEME_DEFAULT


@dataclass
class DebugSettings:
    enabled: bool = False                     # Console Meldungen aus dem HTML auf INFO heben


@dataclass
class LoggingSettings:
    level: str = "INFO"                       # DEBUG, INFO, WARNING, ERROR
    fmt: str = "plain"                        # "plain" oder "json"
    dir: Optional[str] = None                 # Zielordner
    filename: str = "skui.log"
    rotate_max_bytes: int = 5 * 1024 * 1024   # 5 MB
    rotate_backups: int = 5
    console: bool = True
    qt_messages: bool = True


@dataclass
class Config:
    window: WindowOptions = field(default_factory=WindowOptions)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    debug: DebugSettings = field(default_factory=DebugSettings)


__all__ = [
    "Config",
    "WindowOptions",
    "SizeLimit",
    "LoggingSettings",
    "DebugSettings",
    "THEME_DEFAULT",
    "merge_options",
    "parse_size_limit",
    "load_config",
    "save_config",
]

_WINDOW_KEYS = frozenset(f.name for f in fields(WindowOptions))

# =========================
# Parser Hilfen
# =========================

def _safe_str(x: Any, default: str = "") -> str:
    if x is None:
        return default
    try:
        return str(x)
    except Exception:
        return default

def _as_bool(d: Dict[str, Any], key: str, default: bool) -> bool:
    try:
        v = d.get(key, default)
        return bool(v)
    except Exception:
        return default

def _as_int(d: Dict[str, Any], key: str, default: int) -> int:
    try:
        return int(d.get(key, default))
    except Exception:
        return default


def _opt_str(value: Any) -> Optional[str]:
    s = _safe_str(value)
    return s or None


def _as_opt_int(value: Any) -> Optional[int]:
    try:
        if value is None:
            return None
        return int(value)
    except Exception:
        return None


def parse_size_limit(value: Any) -> Optional[Union[int, SizeLimit]]:
    """
    Versteht:
      - 600                       -> maximale Groesse
      - [200, 600] / (200, None)  -> Minimum und Maximum
      - {"min": 200, "max": 600}  -> Minimum und Maximum
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, SizeLimit):
        return value
    if isinstance(value, dict):
        return SizeLimit(
            minimum=_as_opt_int(value.get("min")) or 0,
            maximum=_as_opt_int(value.get("max")),
        )
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        minimum = _as_opt_int(value[0]) or 0
        maximum = _as_opt_int(value[1]) if len(value) > 1 else None
        return SizeLimit(minimum=minimum, maximum=maximum)
    return _as_opt_int(value)


def merge_options(base: Optional[WindowOptions] = None, overrides: Optional[Dict[str, Any]] = None) -> WindowOptions:
    """Return a new ``WindowOptions`` with ``overrides`` merged over ``base``."""
    merged = replace(base) if base is not None else WindowOptions()
    known: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if key not in _WINDOW_KEYS:
            log.warning("unknown window option %r ignored", key)
            continue
        known[key] = value
    # Limits from a WindowOptions instance are normalised too
    for key in ("width_limit", "height_limit"):
        known[key] = parse_size_limit(known.get(key, getattr(merged, key)))
    return replace(merged, **known)

# =========================
# Parser
# =========================

def _parse_window(data: Dict[str, Any]) -> WindowOptions:
    wd = data.get("window") or {}
    if not isinstance(wd, dict):
        wd = {}
    defaults = WindowOptions()
    theme = wd.get("theme", defaults.theme)
    return WindowOptions(
        title=_safe_str(wd.get("title") or defaults.title),
        left=_as_int(wd, "left", defaults.left),
        top=_as_int(wd, "top", defaults.top),
        width=_as_int(wd, "width", defaults.width),
        height=_as_int(wd, "height", defaults.height),
        width_limit=parse_size_limit(wd.get("width_limit")),
        height_limit=parse_size_limit(wd.get("height_limit")),
        resizable=_as_bool(wd, "resizable", defaults.resizable),
        minimize=_as_bool(wd, "minimize", defaults.minimize),
        maximize=_as_bool(wd, "maximize", defaults.maximize),
        modal=_as_bool(wd, "modal", defaults.modal),
        preferences_key=_opt_str(wd.get("preferences_key")),
        theme=_opt_str(theme),
    )


def _parse_logging(data: Dict[str, Any]) -> LoggingSettings:
    lg = data.get("logging") or {}
    return LoggingSettings(
        level=_safe_str(lg.get("level") or "INFO"),
        fmt=_safe_str(lg.get("fmt") or "plain"),
        dir=_safe_str(lg.get("dir") or "") or None,
        filename=_safe_str(lg.get("filename") or "skui.log"),
        rotate_max_bytes=_as_int(lg, "rotate_max_bytes", 5 * 1024 * 1024),
        rotate_backups=_as_int(lg, "rotate_backups", 5),
        console=_as_bool(lg, "console", True),
        qt_messages=_as_bool(lg, "qt_messages", True),
    )


def _parse_debug(data: Dict[str, Any]) -> DebugSettings:
    dbg = data.get("debug") or {}
    return DebugSettings(enabled=_as_bool(dbg, "enabled", False))

# =========================
# Oeffentliche API
# =========================

def load_config(path: Path) -> Config:
    """
    Laedt eine Config von Pfad. Heilt fehlende Felder und erzeugt bei Bedarf Defaults.
    """
    try:
        if not path.exists():
            log.info("config file not found at %s. using defaults", path)
            return Config()

        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            log.warning("config at %s is not an object. using defaults", path)
            return Config()

        return Config(
            window=_parse_window(raw),
            logging=_parse_logging(raw),
            debug=_parse_debug(raw),
        )
    except Exception as ex:
        log.error("failed to load config: %s. using defaults", ex)
        return Config()


def save_config(path: Path, cfg: Config | Dict[str, Any]) -> None:
    """
    Schreibt die Config als JSON. Akzeptiert entweder ein Config Objekt oder ein dict.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        data: Dict[str, Any]
        if isinstance(cfg, dict):
            data = cfg
        else:
            data = asdict(cfg)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except Exception as ex:
        log.error("could not save config: %s", ex)
        raise
