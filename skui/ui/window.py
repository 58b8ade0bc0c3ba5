from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from skui.services.host import Host, NativeDialog, default_host
from skui.ui.base import Base
from skui.ui.bridge import CONSOLE_ID, Bridge, CallbackKind, parse_event_callback
from skui.ui.control_manager import ControlManager
from skui.utils import debug
from skui.utils.config_loader import THEME_DEFAULT, SizeLimit, WindowOptions, merge_options
from skui.utils.resource_loader import theme_path, window_html_path


class Window(Base, ControlManager):
    """Basic window. Use this as the foundation for custom window types.

    Options are merged over :class:`WindowOptions` defaults, either from a
    dict, a ``WindowOptions`` instance or keyword arguments::

        window = Window({"title": "Hello"}, width=400, resizable=True)
        window.on("ready", lambda w: w.log.info("ready"))
        window.show()

    A placeholder dialog and bridge exist right after construction. The
    dialog that is actually displayed is built in :meth:`show`.
    """

    EVENTS = ("ready",)

    THEME_DEFAULT = THEME_DEFAULT

    def __init__(
        self,
        options: Union[Dict[str, Any], WindowOptions, None] = None,
        host: Optional[Host] = None,
        **overrides: Any,
    ) -> None:
        super().__init__()
        base = options if isinstance(options, WindowOptions) else None
        merged = merge_options(base, options if isinstance(options, dict) else None)
        self._options = merge_options(merged, overrides)
        self._host = host if host is not None else default_host()

        # The displayed dialog is recreated in show(); until then the bridge
        # wraps a placeholder so it is never None.
        self._dialog: NativeDialog = self._host.create_dialog()
        self._bridge = Bridge(self, self._dialog)
        # Set once the page reported SKUI_Window_Ready
        self._ready = False

    # ---------- Eigenschaften ----------
    @property
    def window(self) -> "Window":
        return self

    @property
    def bridge(self) -> Bridge:
        return self._bridge

    @property
    def options(self) -> WindowOptions:
        return merge_options(self._options)

    @property
    def title(self) -> str:
        return str(self._options.title)

    @property
    def visible(self) -> bool:
        return self._dialog.is_visible()

    @property
    def ready(self) -> bool:
        """True once the page of the current dialog has loaded."""
        return self._ready and self._dialog.is_visible()

    @property
    def client_size(self) -> Tuple[int, int]:
        """Width and height of the client area."""
        return self._dialog.get_client_size()

    @client_size.setter
    def client_size(self, value: Tuple[int, int]) -> None:
        self.set_client_size(*value)

    def set_client_size(self, width: int, height: int) -> bool:
        """Adjust the window so the client area fits ``width`` x ``height``.

        Returns ``False`` when the dialog is not shown yet.
        """
        if not self._dialog.is_visible():
            return False
        self._dialog.set_size(width, height)
        client_width, client_height = self._dialog.get_client_size()
        adjust_width = width - client_width
        adjust_height = height - client_height
        if adjust_width != 0 or adjust_height != 0:
            self._dialog.set_size(width + adjust_width, height + adjust_height)
        return True

    # ---------- Delegation ----------
    def bring_to_front(self) -> None:
        self._dialog.bring_to_front()

    def close(self) -> None:
        self._dialog.close()

    def set_position(self, left: int, top: int) -> None:
        self._dialog.set_position(left, top)

    def set_size(self, width: int, height: int) -> None:
        self._dialog.set_size(width, height)

    def write_image(self, image_path: str, top_left_x: int, top_left_y: int,
                    bottom_right_x: int, bottom_right_y: int) -> None:
        self._dialog.write_image(image_path, top_left_x, top_left_y, bottom_right_x, bottom_right_y)

    def to_js(self) -> str:
        return '"Window"'

    def show(self) -> None:
        if self._dialog.is_visible():
            self._dialog.bring_to_front()
            return
        # Fresh dialog so the last saved position and size are picked up.
        self._ready = False
        self._dialog = self._init_dialog(self._options)
        self._bridge = Bridge(self, self._dialog)
        if self._host.platform_is_osx or self._options.modal:
            # macOS has no modal dialogs; the host keeps them on top instead.
            self._dialog.show_modal()
        else:
            self._dialog.show()
        self.log.info("window %r shown", self.title, extra={"source": "window"})

    # ---------- Dialog Aufbau ----------
    def _init_dialog(self, options: WindowOptions) -> NativeDialog:
        dialog = self._host.create_dialog(
            dialog_title=options.title,
            preferences_key=options.preferences_key,
            resizable=options.resizable,
            scrollable=False,
            left=options.left,
            top=options.top,
            width=options.width,
            height=options.height,
            minimize=options.minimize,
            maximize=options.maximize,
        )
        if hasattr(dialog, "set_full_security"):
            dialog.set_full_security(True)
        if hasattr(dialog, "set_navigation_buttons_enabled"):
            dialog.set_navigation_buttons_enabled(False)
        # Fixed windows would otherwise come up with the stored preference size.
        if not options.resizable:
            dialog.set_size(options.width, options.height)
        self._apply_limit(options.width_limit, dialog.set_min_width, dialog.set_max_width)
        self._apply_limit(options.height_limit, dialog.set_min_height, dialog.set_max_height)

        dialog.add_action_callback(CallbackKind.READY.value, self._on_window_ready)
        dialog.add_action_callback(CallbackKind.EVENT.value, self._on_event_callback)
        dialog.add_action_callback(CallbackKind.OPEN_URL.value, self._on_open_url)

        html_file = window_html_path()
        if html_file is None:
            self.log.error("window.html is missing from the package", extra={"source": "window"})
        else:
            dialog.set_file(str(html_file))
        return dialog

    @staticmethod
    def _apply_limit(limit, set_minimum, set_maximum) -> None:
        if limit is None:
            return
        if isinstance(limit, SizeLimit):
            minimum, maximum = limit
            set_minimum(max(0, minimum or 0))
            if maximum is not None:
                set_maximum(maximum)
        else:
            set_maximum(limit)

    # ---------- Callbacks aus dem HTML ----------
    def _on_window_ready(self, dialog: NativeDialog, params: str) -> None:
        self.log.debug("dialog ready", extra={"source": "window"})
        self.bridge.add_container(self)
        self._ready = True
        stylesheet = theme_path(self._options.theme)
        if stylesheet is not None:
            self.bridge.call("UI.load_theme", stylesheet.resolve().as_uri())
        elif self._options.theme:
            self.log.warning("theme %s not found", self._options.theme, extra={"source": "window"})
        self.trigger_event("ready")

    def _on_event_callback(self, dialog: NativeDialog, params: str) -> None:
        try:
            try:
                message = parse_event_callback(params)
            except ValueError as ex:
                self.log.warning("%s", ex, extra={"source": "window"})
                return
            if message.ui_id == CONSOLE_ID:
                debug.puts(message.args or "")
                return
            control = self.find_control_by_ui_id(message.ui_id)
            if control is not None:
                control.trigger_event(message.event, *message.arguments())
        finally:
            # Let the page send its next queued message.
            self.bridge.pump_message()

    def _on_open_url(self, dialog: NativeDialog, params: str) -> None:
        self.log.debug("open url %s", params, extra={"source": "window"})
        self._host.open_url(params)
