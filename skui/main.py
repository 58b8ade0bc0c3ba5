# skui/main.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from skui.services.host import default_host
from skui.ui.controls import Button, Container, Label
from skui.ui.window import Window
from skui.utils import debug
from skui.utils.config_loader import Config, load_config
from skui.utils.logger import get_logger, init_logging, log_exceptions, shutdown_logging
from skui.version import __version__


def default_cfg_path() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent / "config.json"
    return Path.cwd() / "skui.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="SKUI demo window")
    p.add_argument("--config", "-c", default=str(default_cfg_path()), help="Pfad zur Config (JSON)")
    p.add_argument("--log-level", default=None, help="Log Level zB DEBUG INFO WARNING ERROR")
    p.add_argument("--title", default=None, help="Fenstertitel ueberschreiben")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def build_demo_window(cfg: Config, host=None) -> Window:
    """Window with a greeting label and a button that counts its clicks."""
    log = get_logger(__name__)
    window = Window(cfg.window, host=host)

    group = Container(name="group")
    label = Label("Hello from Python", name="greeting")
    button = Button("Click me", name="counter")
    group.add_control(label)
    group.add_control(button)
    window.add_control(group)

    clicks = {"count": 0}

    @button.on("click")
    def _clicked(control, *args):
        clicks["count"] += 1
        log.info("button clicked %d times", clicks["count"], extra={"source": "demo", "ui_id": control.ui_id})

    window.on("ready", lambda w: log.info("window %r ready", w.title, extra={"source": "demo"}))
    return window


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    cfg_path = Path(args.config).expanduser().resolve()
    cfg = load_config(cfg_path)
    if args.log_level:
        cfg.logging.level = args.log_level
    if args.title:
        cfg.window.title = args.title

    init_logging(cfg.logging)
    debug.set_enabled(cfg.debug.enabled)
    log = get_logger(__name__)
    log.info("skui %s starting", __version__, extra={"source": "main"})

    @log_exceptions(log)
    def run() -> int:
        host = default_host()
        app = host.application()
        window = build_demo_window(cfg, host=host)
        window.show()
        return app.exec()

    try:
        return run()
    finally:
        log.info("skui stopped", extra={"source": "main"})
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
