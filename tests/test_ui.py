"""Smoke tests for the Qt window, run on the offscreen platform."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6 import QtGui  # noqa: E402
from PySide6.QtCore import QEvent, Qt  # noqa: E402

from calculator import UI  # noqa: E402
from calculator import error as E  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    widget = UI.CalculatorWindow()
    yield widget
    widget.close()
    widget.deleteLater()


def test_buttons_drive_the_engine(window):
    for key in ["1", "2", "3", "4", "+", "1", "="]:
        window.handle_button_press(key)
    assert window.display.text() == "1,235"
    assert window.engine.display_value == "1235"


def test_clear_button_legend(window):
    clear_button = window.button_objects["Clear"]
    assert clear_button.text() == "AC"

    window.handle_button_press("7")
    assert clear_button.text() == "C"

    window.handle_button_press("Clear")
    assert clear_button.text() == "AC"
    assert window.display.text() == "0"


def test_key_events(window):
    for qt_key, text in [(Qt.Key.Key_9, "9"), (Qt.Key.Key_Period, "."), (Qt.Key.Key_5, "5")]:
        event = QtGui.QKeyEvent(QEvent.Type.KeyPress, qt_key, Qt.KeyboardModifier.NoModifier, text)
        window.keyPressEvent(event)
    assert window.display.text() == "9.5"

    event = QtGui.QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Backspace, Qt.KeyboardModifier.NoModifier, "")
    window.keyPressEvent(event)
    assert window.display.text() == "9."


def test_key_names():
    assert UI.key_name(Qt.Key.Key_Return, "\r") == "Enter"
    assert UI.key_name(Qt.Key.Key_Escape, "\x1b") == "Escape"
    assert UI.key_name(Qt.Key.Key_Plus, "+") == "+"


def test_copy_uses_formatted_text(window, monkeypatch):
    copied = []
    monkeypatch.setattr(UI.pyperclip, "copy", copied.append)
    for key in ["1", "0", "0", "0"]:
        window.handle_button_press(key)

    assert window.copy_display() == "1,000"
    assert copied == ["1,000"]

    window.setting_value_list["copy_formatted"] = False
    assert window.copy_display() == "1000"


def test_copy_failure_becomes_clipboard_error(window, monkeypatch):
    def broken_copy(text):
        raise UI.pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(UI.pyperclip, "copy", broken_copy)
    with pytest.raises(E.ClipboardError) as excinfo:
        window.copy_display()
    assert excinfo.value.code == "6001"


def test_settings_dialog_validates_input(qapp):
    dialog = UI.SettingsDialog()
    dialog.widgets["max_fraction_digits"].setText("99")
    with pytest.raises(E.ConfigurationError):
        dialog.collect_settings()

    dialog.widgets["max_fraction_digits"].setText("2")
    dialog.widgets["darkmode"].setChecked(True)
    settings = dialog.collect_settings()
    assert settings["max_fraction_digits"] == 2
    assert settings["darkmode"] is True
