from __future__ import annotations

import pytest

from robotprefs.channel import PreferencesChannel
from robotprefs.sources import NetworkTableSource
from robotprefs.tables import MemoryTableInstance
from robotprefs.ui.core import RobotPreferencesWidget
from robotprefs.values import PreferencesSnapshot

tk = pytest.importorskip("tkinter")


@pytest.fixture
def root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


def _app(root, data):
    from robotprefs.ui.tk import App

    widget = RobotPreferencesWidget(PreferencesChannel(PreferencesSnapshot(data)))
    return App(root, widget=widget)


def test_sheet_rows_follow_items(root):
    app = _app(root, {"k10": 1, "k2": True, ".meta": "x"})
    assert app.sheet.visible_keys() == ["k2", "k10"]
    assert set(app.sheet.rows) == {"k2", "k10"}
    assert app.sheet.rows["k2"].is_bool
    app.widget.channel.receive(PreferencesSnapshot({"k2": True}))
    assert set(app.sheet.rows) == {"k2"}
    app.close()


def test_rows_survive_remote_updates(root):
    app = _app(root, {"name": "x", "speed": 1.0})
    row = app.sheet.rows["name"]
    row.var.set("xa")
    row._on_key()
    app.widget.channel.receive(PreferencesSnapshot({"name": "x", "speed": 2.0}))
    assert app.sheet.rows["name"] is row
    assert row.var.get() == "xa"
    row._on_commit()
    assert app.widget.data["name"].payload == "xa"
    app.close()


def test_invalid_edit_alerts(root):
    app = _app(root, {"gain": 1.0})
    alerts = []
    row = app.sheet.rows["gain"]
    row._on_alert = lambda title, message: alerts.append((title, message))
    row.var.set("fast")
    row._on_key()
    row._on_commit()
    assert alerts == [("Bad Value", "Invalid number value")]
    assert app.widget.data["gain"].payload == 1.0
    app.close()


def test_search_filters_rows(root):
    app = _app(root, {"armKp": 1, "driveKp": 2, "name": "x"})
    app.sheet.search_var.set("KP")
    assert app.sheet.visible_keys() == ["armKp", "driveKp"]
    app.widget.search_box_visible.set(False)
    assert app.sheet.search_var.get() == ""
    assert app.sheet.visible_keys() == ["armKp", "driveKp", "name"]
    app.close()


def test_dispatcher_runs_queued_updates(root):
    from robotprefs.ui.tk import App

    inst = MemoryTableInstance()
    table = inst.get_table("Preferences")
    table.put("a", 1)
    app = App(root, widget=RobotPreferencesWidget(instance=lambda: inst))
    app.bind_source(NetworkTableSource("/Preferences", inst))
    assert app.sheet.visible_keys() == ["a"]
    table.put("b", 2)
    assert app.sheet.visible_keys() == ["a"]
    assert app.dispatcher.drain() == 1
    assert app.sheet.visible_keys() == ["a", "b"]
    app.close()


def test_new_entry_dialog_button_state(root):
    from robotprefs.ui.tk.dialogs import NewPreferenceEntryDialog

    app = _app(root, {"gain": 1.0})
    form = app.widget.entries.new_entry_form()
    dialog = NewPreferenceEntryDialog(root, form, app.widget.channel)
    assert dialog.add_button.instate(["disabled"])
    dialog.key_var.set("gain")
    assert dialog.add_button.instate(["disabled"])
    dialog.key_var.set("kI")
    dialog.type_var.set("Number")
    dialog.value_var.set("0.1")
    assert not dialog.add_button.instate(["disabled"])
    app.widget.channel.receive(PreferencesSnapshot({"gain": 1.0, "kI": 0.0}))
    assert dialog.add_button.instate(["disabled"])
    app.widget.channel.receive(PreferencesSnapshot({"gain": 1.0}))
    dialog.submit()
    assert dialog.result.key == "kI"
    assert dialog.result.value == "0.1"
    app.close()


def test_remove_dialog(root):
    from robotprefs.ui.tk.dialogs import RemovePreferenceEntryDialog

    app = _app(root, {"b": 1, "a": 2, ".type": "x"})
    dialog = RemovePreferenceEntryDialog(root, app.widget.entries.remove_entry_form())
    assert dialog.form.keys == ["a", "b"]
    assert dialog.key_var.get() == "a"
    dialog.key_var.set("b")
    dialog._sync()
    dialog.submit()
    assert dialog.result == "b"
    app.close()
