import pytest

from skui.tests import FakeHost, NavigatingDialog
from skui.ui.bridge import Bridge
from skui.ui.controls import Button, Container
from skui.ui.window import Window
from skui.utils.config_loader import SizeLimit, WindowOptions


def _shown_window(**options):
    host = FakeHost()
    window = Window(options, host=host)
    window.show()
    return window, host, host.dialogs[-1]


@pytest.mark.parametrize("options", [
    None,
    {},
    {"title": "Tools", "modal": True},
    {"width_limit": 600, "height_limit": (100, None), "resizable": True},
    WindowOptions(title="From dataclass"),
])
def test_bridge_exists_right_after_construction(options):
    host = FakeHost()
    window = Window(options, host=host)
    assert isinstance(window.bridge, Bridge)
    assert window.bridge.dialog is host.dialogs[0]
    assert host.dialogs[0].calls_named("show") == []


def test_options_merge_over_defaults():
    window = Window({"title": "Tools", "width": 500}, host=FakeHost(), height=120)
    options = window.options
    assert options.title == "Tools"
    assert options.width == 500
    assert options.height == 120
    assert options.left == 400
    assert options.theme == Window.THEME_DEFAULT


def test_title_and_options_are_copies():
    window = Window({"title": "Tools"}, host=FakeHost())
    title = window.title
    title += " (changed)"
    options = window.options
    options.title = "Hacked"
    assert window.title == "Tools"


def test_set_client_size_before_show_fails_softly():
    host = FakeHost()
    window = Window(host=host)
    assert window.set_client_size(400, 300) is False
    assert host.dialogs[0].calls_named("set_size") == []


def test_set_client_size_compensates_for_chrome():
    window, _, dialog = _shown_window(resizable=True)
    dialog.calls.clear()
    dialog.client_size = (390, 280)
    assert window.set_client_size(400, 300) is True
    assert dialog.calls_named("set_size") == [("set_size", 400, 300), ("set_size", 410, 320)]


def test_set_client_size_without_difference_issues_single_request():
    window, _, dialog = _shown_window(resizable=True)
    dialog.calls.clear()
    window.client_size = (400, 300)
    assert dialog.calls_named("set_size") == [("set_size", 400, 300)]
    assert window.client_size == (400, 300)


def test_show_recreates_dialog_and_registers_callbacks():
    host = FakeHost()
    window = Window({"title": "Tools", "preferences_key": "tools"}, host=host)
    placeholder = window.bridge
    window.show()

    assert len(host.dialogs) == 2
    dialog = host.dialogs[1]
    assert window.bridge is not placeholder
    assert window.bridge.dialog is dialog
    assert dialog.options["dialog_title"] == "Tools"
    assert dialog.options["preferences_key"] == "tools"
    assert dialog.options["scrollable"] is False
    assert set(dialog.callbacks) == {"SKUI_Window_Ready", "SKUI_Event_Callback", "SKUI_Open_URL"}
    assert dialog.file.replace("\\", "/").endswith("assets/html/window.html")
    assert ("set_full_security", True) in dialog.calls
    assert dialog.calls_named("show") == [("show",)]
    assert window.visible


def test_show_uses_current_options():
    host = FakeHost()
    window = Window(host=host)
    window.show()
    window.close()
    assert not window.visible
    window.show()
    assert len(host.dialogs) == 3


def test_show_when_visible_only_brings_to_front():
    window, host, dialog = _shown_window()
    window.show()
    assert len(host.dialogs) == 2
    assert dialog.calls_named("bring_to_front") == [("bring_to_front",)]
    assert len(dialog.calls_named("show")) == 1


def test_modal_window_uses_show_modal():
    _, _, dialog = _shown_window(modal=True)
    assert dialog.calls_named("show_modal") == [("show_modal",)]
    assert dialog.calls_named("show") == []


def test_osx_always_shows_modal():
    host = FakeHost(platform_is_osx=True)
    window = Window(host=host)
    window.show()
    assert host.dialogs[-1].calls_named("show_modal") == [("show_modal",)]


def test_fixed_size_window_forces_size():
    _, _, dialog = _shown_window(width=320, height=240)
    assert dialog.calls_named("set_size")[0] == ("set_size", 320, 240)


def test_resizable_window_keeps_preference_size():
    _, _, dialog = _shown_window(resizable=True)
    assert dialog.calls_named("set_size") == []


def test_size_limits():
    _, _, dialog = _shown_window(width_limit=800, height_limit=(-10, 600))
    assert dialog.calls_named("set_max_width") == [("set_max_width", 800)]
    assert dialog.calls_named("set_min_width") == []
    assert dialog.calls_named("set_min_height") == [("set_min_height", 0)]
    assert dialog.calls_named("set_max_height") == [("set_max_height", 600)]


def test_open_ended_limit_sets_minimum_only():
    _, _, dialog = _shown_window(height_limit=SizeLimit(150, None))
    assert dialog.calls_named("set_min_height") == [("set_min_height", 150)]
    assert dialog.calls_named("set_max_height") == []
    assert dialog.calls_named("set_max_width") == []


def test_delegation():
    window, _, dialog = _shown_window()
    dialog.calls.clear()
    window.set_position(10, 20)
    window.set_size(640, 480)
    window.bring_to_front()
    window.write_image("shot.png", 0, 0, 100, 50)
    window.close()
    assert dialog.calls == [
        ("set_position", 10, 20),
        ("set_size", 640, 480),
        ("bring_to_front",),
        ("write_image", "shot.png", 0, 0, 100, 50),
        ("close",),
    ]


def test_ready_registers_controls_injects_theme_and_fires_event():
    host = FakeHost()
    window = Window(host=host)
    button = window.add_control(Button("OK"))
    window.show()
    dialog = host.dialogs[-1]
    seen = []
    window.on("ready", seen.append)

    dialog.fire("SKUI_Window_Ready")

    assert seen == [window]
    assert dialog.scripts[0].startswith("UI.add_control(")
    assert f'"ui_id": "{button.ui_id}"' in dialog.scripts[0]
    assert dialog.scripts[1].startswith('UI.load_theme("file:')
    assert "theme_os.css" in dialog.scripts[1]


def test_ready_skips_missing_theme():
    window, _, dialog = _shown_window(theme="does_not_exist.css")
    dialog.fire("SKUI_Window_Ready")
    assert not any(s.startswith("UI.load_theme") for s in dialog.scripts)


def test_event_callback_without_arguments():
    window, _, dialog = _shown_window()
    button = window.add_control(Button("OK"))
    received = []
    button.on("click", lambda control, *args: received.append((control, args)))

    dialog.fire("SKUI_Event_Callback", f"{button.ui_id}||click")

    assert received == [(button, ())]


def test_event_callback_with_arguments():
    window, _, dialog = _shown_window()
    button = window.add_control(Button("OK"))
    received = []
    button.on("click", lambda control, *args: received.append(args))

    dialog.fire("SKUI_Event_Callback", f"{button.ui_id}||click||10,20")

    assert received == [("10", "20")]


def test_event_callback_reaches_nested_controls():
    window, _, dialog = _shown_window()
    group = window.add_control(Container())
    button = group.add_control(Button("Nested"))
    received = []
    button.on("click", lambda control: received.append(control))

    dialog.fire("SKUI_Event_Callback", f"{button.ui_id}||click")

    assert received == [button]


def test_console_messages_go_to_debug_sink(monkeypatch):
    from skui.ui import window as window_module

    window, _, dialog = _shown_window()
    button = window.add_control(Button("OK"))
    received = []
    button.on("click", lambda control, *args: received.append(args))
    printed = []
    monkeypatch.setattr(window_module.debug, "puts", lambda *m: printed.extend(m))

    dialog.fire("SKUI_Event_Callback", "Console||log||hello, world")

    assert printed == ["hello, world"]
    assert received == []


@pytest.mark.parametrize("params", [
    "UI_missing||click",
    "UI_missing||click||1,2",
    "Console||log||hello",
    "garbage",
])
def test_pump_message_sent_once_per_callback(params):
    _, _, dialog = _shown_window()
    dialog.fire("SKUI_Event_Callback", params)
    assert dialog.scripts == ["Bridge.pump_message();"]


def test_pump_message_sent_when_handler_raises():
    window, _, dialog = _shown_window()
    button = window.add_control(Button("OK"))

    def broken(control):
        raise RuntimeError("boom")

    button.on("click", broken)
    dialog.scripts.clear()
    with pytest.raises(RuntimeError):
        dialog.fire("SKUI_Event_Callback", f"{button.ui_id}||click")
    assert dialog.scripts == ["Bridge.pump_message();"]


def test_open_url_delegates_to_host():
    _, host, dialog = _shown_window()
    dialog.fire("SKUI_Open_URL", "https://example.com/docs")
    assert host.opened_urls == ["https://example.com/docs"]


def test_controls_added_after_ready_are_pushed_to_page():
    window, _, dialog = _shown_window()
    dialog.fire("SKUI_Window_Ready")
    dialog.scripts.clear()
    group = Container()
    group.add_control(Button("Inside"))
    window.add_control(group)
    assert len(dialog.scripts) == 2
    assert all(s.startswith("UI.add_control(") for s in dialog.scripts)


def test_to_js():
    assert Window(host=FakeHost()).to_js() == '"Window"'


def test_controls_added_before_ready_are_pushed_once():
    window, _, dialog = _shown_window()
    button = window.add_control(Button("OK"))
    assert not window.ready
    assert dialog.scripts == []

    dialog.fire("SKUI_Window_Ready")

    assert window.ready
    pushed = [s for s in dialog.scripts if s.startswith("UI.add_control(")]
    assert len(pushed) == 1
    assert f'"ui_id": "{button.ui_id}"' in pushed[0]


def test_reshow_waits_for_new_page():
    window, host, dialog = _shown_window()
    dialog.fire("SKUI_Window_Ready")
    window.close()
    window.show()
    assert not window.ready
    window.add_control(Button("Later"))
    assert host.dialogs[-1].scripts == []


def test_mapping_limit_from_window_options():
    host = FakeHost()
    window = Window(WindowOptions(width_limit={"min": 200, "max": 600}), host=host)
    window.show()
    dialog = host.dialogs[-1]
    assert dialog.calls_named("set_min_width") == [("set_min_width", 200)]
    assert dialog.calls_named("set_max_width") == [("set_max_width", 600)]


def test_console_message_without_text(monkeypatch):
    from skui.ui import window as window_module

    _, _, dialog = _shown_window()
    printed = []
    monkeypatch.setattr(window_module.debug, "puts", lambda *m: printed.extend(m))

    dialog.fire("SKUI_Event_Callback", "Console||log")

    assert printed == [""]
    assert dialog.scripts == ["Bridge.pump_message();"]


def test_navigation_buttons_disabled_when_supported():
    host = FakeHost(dialog_class=NavigatingDialog)
    Window(host=host).show()
    dialog = host.dialogs[-1]
    assert dialog.calls_named("set_navigation_buttons_enabled") == [("set_navigation_buttons_enabled", False)]
