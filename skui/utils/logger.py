# skui/utils/logger.py
from __future__ import annotations
import json
import logging
import os
import queue
import re
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import Any, Deque, Dict, Optional, Tuple
from collections import deque
from pathlib import Path

from skui.utils.config_loader import LoggingSettings

# ========= Konfiguration =========

MASK_KEYS: Tuple[str, ...] = ("password", "token", "authorization", "auth", "secret")
MEMORY_BUFFER = 2000

# ========= Globale Objekte =========

_log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue()
_listener: Optional[QueueListener] = None
_memory_ring: Deque[str] = deque(maxlen=MEMORY_BUFFER)
_root_config: Optional[LoggingSettings] = None
_session_id: str = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S-%f")
_current_log_path: Optional[str] = None   # Pfad der aktuell verwendeten Logdatei

# ========= Formatter =========

class PlainFormatter(logging.Formatter):
    default_msec_format = '%s.%03d'

    def format(self, record: logging.LogRecord) -> str:
        sid = getattr(record, "session", _session_id)
        src = getattr(record, "source", None)
        ui_id = getattr(record, "ui_id", None)
        base = super().format(record)
        extra = []
        if src:
            extra.append(f"source={src}")
        if ui_id is not None:
            extra.append(f"ui_id={ui_id}")
        if sid:
            extra.append(f"session={sid}")
        if extra:
            base = f"{base} | " + " ".join(extra)
        return base

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
            "pid": record.process,
            "tid": record.thread,
            "thread": record.threadName,
            "session": getattr(record, "session", _session_id),
            "source": getattr(record, "source", None),
            "ui_id": getattr(record, "ui_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

# ========= Filter =========

class SecretsFilter(logging.Filter):
    """Maskiert bekannte Schluessel in Messages."""
    def __init__(self, keys: Tuple[str, ...]):
        super().__init__()
        self.patterns = [re.compile(rf"(?i)\b({re.escape(k)})\b\s*[:=]\s*([^\s,;]+)") for k in keys]

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        for pat in self.patterns:
            msg = pat.sub(r"\1=<redacted>", msg)
        record.msg = msg
        record.args = None
        return True

# ========= Memory Ring =========

class MemoryRingHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
        except Exception:
            return
        _memory_ring.append(line)

def read_recent_logs(limit: int = 500) -> str:
    if limit <= 0:
        return ""
    lines = list(_memory_ring)[-limit:]
    return "\n".join(lines)

# ========= Utilities =========

def _default_log_dir() -> str:
    base = os.getenv("LOCALAPPDATA", "")
    if base:
        d = os.path.join(base, "SKUI", "logs")
    else:
        d = os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d

def _split_name(filename: str) -> tuple[str, str]:
    """Teilt 'foo.log' -> ('foo', '.log'), 'foo' -> ('foo', '.log')"""
    p = Path(filename)
    if p.suffix:
        return p.stem, p.suffix
    return filename, ".log"

def _pick_next_logfile_path(log_dir: str, base_filename: str) -> str:
    """
    Waehlt fuer den aktuellen Tag eine neue Datei:
      YYYYMMDD_<n>_<stem>.log
    wobei <n> = max vorhandener Index + 1.
    """
    date_str = datetime.now().strftime("%Y%m%d")
    stem, ext = _split_name(base_filename)
    rx = re.compile(rf"^{date_str}_(\d+)_({re.escape(stem)}){re.escape(ext)}$", re.IGNORECASE)

    max_n = 0
    try:
        for name in os.listdir(log_dir):
            m = rx.match(name)
            if m:
                max_n = max(max_n, int(m.group(1)))
    except FileNotFoundError:
        os.makedirs(log_dir, exist_ok=True)

    return os.path.join(log_dir, f"{date_str}_{max_n + 1}_{stem}{ext}")

def _parse_level(s: str) -> int:
    level = getattr(logging, str(s).upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO

# ========= Initialisierung =========

def init_logging(cfg: Optional[LoggingSettings]) -> None:
    """Initialisiert asynchrones Logging und erstellt pro Start eine neue Datei."""
    global _listener, _root_config, _memory_ring, _current_log_path

    _root_config = cfg or LoggingSettings()
    log_dir = _root_config.dir or _default_log_dir()
    os.makedirs(log_dir, exist_ok=True)

    selected_path = _pick_next_logfile_path(log_dir, _root_config.filename)
    _current_log_path = selected_path

    # Root Logger neu aufsetzen
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_parse_level(_root_config.level))

    qh = QueueHandler(_log_queue)
    qh.setLevel(root.level)
    root.addHandler(qh)

    if _root_config.fmt.lower() == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = PlainFormatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")

    handlers: list[logging.Handler] = []

    if _root_config.rotate_max_bytes and _root_config.rotate_max_bytes > 0:
        file_handler: logging.Handler = RotatingFileHandler(
            selected_path,
            maxBytes=_root_config.rotate_max_bytes,
            backupCount=_root_config.rotate_backups,
            encoding="utf-8"
        )
    else:
        file_handler = logging.FileHandler(selected_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.addFilter(SecretsFilter(MASK_KEYS))
    handlers.append(file_handler)

    if _root_config.console:
        sh = logging.StreamHandler(stream=sys.stderr)
        sh.setFormatter(formatter)
        sh.addFilter(SecretsFilter(MASK_KEYS))
        handlers.append(sh)

    _memory_ring = deque(maxlen=MEMORY_BUFFER)
    mem = MemoryRingHandler()
    mem.setFormatter(formatter)
    handlers.append(mem)

    shutdown_logging()
    _listener = QueueListener(_log_queue, *handlers, respect_handler_level=False)
    _listener.start()

    if _root_config.qt_messages:
        _install_qt_message_handler()

    get_logger(__name__).info("logging initialised", extra={"source": "logging"})
    get_logger(__name__).info(f"log file: {selected_path}", extra={"source": "logging"})


def shutdown_logging() -> None:
    """Stoppt den Listener und schreibt ausstehende Records weg."""
    global _listener
    if _listener is None:
        return
    _listener.stop()
    for handler in _listener.handlers:
        handler.close()
    _listener = None

# ========= Helpers =========

class _Adapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        kwargs = kwargs or {}
        extra = kwargs.get("extra", {})
        if not isinstance(extra, dict):
            extra = {}
        for key, value in (self.extra or {}).items():
            extra.setdefault(key, value)
        extra.setdefault("session", _session_id)
        kwargs["extra"] = extra
        return msg, kwargs

def get_logger(name: str, **extra) -> logging.LoggerAdapter:
    base = logging.getLogger(name)
    return _Adapter(base, extra or {})

def get_log_path() -> str:
    """Gibt den Pfad der aktuell verwendeten Logdatei zurueck."""
    if _current_log_path:
        return _current_log_path
    d = _default_log_dir()
    stem, ext = _split_name(LoggingSettings().filename)
    today = datetime.now().strftime("%Y%m%d")
    return os.path.join(d, f"{today}_1_{stem}{ext}")

# ========= Qt Message Handler =========

def _install_qt_message_handler():
    try:
        from skui.qt import QtCore
    except ImportError:
        # Ohne Qt Binding gibt es nichts umzuleiten
        return

    log = get_logger("qt")
    lvl_map = {
        QtCore.QtMsgType.QtDebugMsg: logging.DEBUG,
        QtCore.QtMsgType.QtInfoMsg: logging.INFO,
        QtCore.QtMsgType.QtWarningMsg: logging.WARNING,
        QtCore.QtMsgType.QtCriticalMsg: logging.ERROR,
        QtCore.QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def handler(msg_type, context, message):
        log.log(lvl_map.get(msg_type, logging.INFO), str(message), extra={"source": "qt"})

    QtCore.qInstallMessageHandler(handler)

# ========= Dekorator =========

def log_exceptions(logger: logging.LoggerAdapter, level: int = logging.ERROR):
    """Dekorator der Exceptions loggt und erneut wirft."""
    def deco(func):
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SystemExit:
                raise
            except KeyboardInterrupt:
                logger.warning("interrupted", extra={"source": "exception"})
                raise
            except Exception:
                logger.log(level, "uncaught exception in %s", func.__name__, exc_info=True, extra={"source": "exception"})
                raise
        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper
    return deco
