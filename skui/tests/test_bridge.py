import json

import pytest

from skui.tests import FakeDialog, FakeHost
from skui.ui.bridge import Bridge, CallbackKind, EventMessage, parse_event_callback, to_js
from skui.ui.controls import Button, Container, Label
from skui.ui.window import Window


def test_parse_event_without_arguments():
    message = parse_event_callback("42||click")
    assert message == EventMessage(ui_id="42", event="click", args=None)
    assert message.arguments() == []


def test_parse_event_with_arguments():
    message = parse_event_callback("42||click||10,20")
    assert message.args == "10,20"
    assert message.arguments() == ["10", "20"]


def test_parse_keeps_separator_inside_arguments():
    message = parse_event_callback("Console||log||a||b")
    assert message.args == "a||b"


def test_arguments_drop_trailing_empty_values():
    assert parse_event_callback("1||change||a,,b,,").arguments() == ["a", "", "b"]
    assert parse_event_callback("1||change||").arguments() == []


@pytest.mark.parametrize("payload", ["", "42", "42||"])
def test_parse_rejects_missing_event(payload):
    with pytest.raises(ValueError):
        parse_event_callback(payload)


def test_callback_names():
    assert CallbackKind("SKUI_Event_Callback") is CallbackKind.EVENT
    assert CallbackKind.READY.value == "SKUI_Window_Ready"
    assert CallbackKind.OPEN_URL.value == "SKUI_Open_URL"


def test_to_js_prefers_objects_own_conversion():
    button = Button("OK")
    assert to_js(button) == json.dumps(button.ui_id)
    assert to_js({"a": [1, None, True]}) == '{"a": [1, null, true]}'
    assert to_js("Grüße") == '"Grüße"'


def test_call_builds_script():
    dialog = FakeDialog()
    bridge = Bridge(None, dialog)
    bridge.call("UI.update", Button("x"), 3, "text")
    bridge.pump_message()
    assert dialog.scripts[0].startswith('UI.update("UI_')
    assert dialog.scripts[0].endswith(', 3, "text");')
    assert dialog.scripts[1] == "Bridge.pump_message();"


def test_add_container_walks_nested_controls():
    window = Window(host=FakeHost())
    group = window.add_control(Container(name="group"))
    label = group.add_control(Label("inside"))
    button = window.add_control(Button("after"))

    dialog = FakeDialog()
    Bridge(window, dialog).add_container(window)

    payloads = [json.loads(s[len("UI.add_control("):-2]) for s in dialog.scripts]
    assert [p["ui_id"] for p in payloads] == [group.ui_id, label.ui_id, button.ui_id]
    assert payloads[1]["parent"] == group.ui_id
    assert payloads[1]["caption"] == "inside"
    assert payloads[0]["type"] == "Container"
