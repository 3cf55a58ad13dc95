# UI.py
""""PySide6 user interface for the Pocket Calculator.

Structure
---------
- CalculatorWindow: main window with display and keypad
- SettingsDialog: modal dialog for user preferences

Responsibilities (CalculatorWindow)
-----------------------------------
- Build window, display, layout and buttons
- Turn button presses and key presses into key names for KeyboardMapping
- Render engine.display_value through DisplayFormatter
- Switch the clear key between 'AC' and 'C'
- Keep the display readable (auto-resizing font, dark/light mode)
- Copy the display to the clipboard
- Show CalculatorErrors as dialogs

Responsibilities (Settings)
---------------------------
- Load current settings and their descriptions via config_manager
- Validate user input (e.g. fraction digits between 0 and 12)
- Save and apply theme changes immediately
"""""

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, Signal, QTimer
import sys
from pathlib import Path
import pyperclip
from . import error as E
from . import config_manager as config_manager
from . import KeyboardMapping as KeyboardMapping
from .CalculatorEngine import CalculatorEngine
from .DisplayFormatter import format_display, clear_label

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    # We are running in a PyInstaller bundle (.exe)
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    # We are running in a normal Python environment (.py)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

SETTINGS_KEY = "Settings"
COPY_KEY = "Copy"

# (label, row, column, column span, key name)
BUTTONS = [
    ('⚙️', 0, 0, 1, SETTINGS_KEY), ('📋', 0, 1, 1, COPY_KEY), ('⌫', 0, 2, 2, KeyboardMapping.BACKSPACE),
    ('AC', 1, 0, 1, KeyboardMapping.CLEAR), ('±', 1, 1, 1, KeyboardMapping.TOGGLE_SIGN),
    ('%', 1, 2, 1, '%'), ('÷', 1, 3, 1, '/'),
    ('7', 2, 0, 1, '7'), ('8', 2, 1, 1, '8'), ('9', 2, 2, 1, '9'), ('×', 2, 3, 1, '*'),
    ('4', 3, 0, 1, '4'), ('5', 3, 1, 1, '5'), ('6', 3, 2, 1, '6'), ('−', 3, 3, 1, '-'),
    ('1', 4, 0, 1, '1'), ('2', 4, 1, 1, '2'), ('3', 4, 2, 1, '3'), ('+', 4, 3, 1, '+'),
    ('0', 5, 0, 2, '0'), ('●', 5, 2, 1, '.'), ('=', 5, 3, 1, '='),
]

# Buttons that support "press and hold"
HOLD_BUTTONS = KeyboardMapping.DIGIT_KEYS + [KeyboardMapping.BACKSPACE]

OPERATOR_KEYS = ['/', '*', '-', '+', '=']

# Qt keys without a printable text of their own
NAMED_KEYS = {
    int(Qt.Key.Key_Return): KeyboardMapping.ENTER,
    int(Qt.Key.Key_Enter): KeyboardMapping.ENTER,
    int(Qt.Key.Key_Backspace): KeyboardMapping.BACKSPACE,
    int(Qt.Key.Key_Clear): KeyboardMapping.CLEAR,
    int(Qt.Key.Key_Escape): KeyboardMapping.ESCAPE,
}


def key_name(qt_key, text):
    """Map a Qt key code plus its typed text to a KeyboardMapping key name."""
    return NAMED_KEYS.get(int(qt_key), text)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting is either a checkbox (booleans) or an
    input field (numbers and text). Nothing is written unless all fields validate.

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Setting key -> widget

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer and Text settings) ---
            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label_text = description
                if key_value in config_manager.INT_LIMITS:
                    low, high = config_manager.INT_LIMITS[key_value]
                    label_text += f" ({low}-{high}):"
                label = QtWidgets.QLabel(label_text)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)  # Make input field expand
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def collect_settings(self):
        """Read all widgets into a new settings dict (raises ConfigurationError on bad input)."""
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():
            old_value = self.setting_value_list[key_value]

            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()
                continue

            new_value_str = widget.text().strip()

            # If user left it blank, keep the old value
            if new_value_str == "":
                continue

            if isinstance(old_value, int):
                try:
                    new_settings[key_value] = int(new_value_str)
                except ValueError:
                    raise E.ConfigurationError(f"'{new_value_str}' is not a whole number.",
                                               code="5002", key=key_value)
            else:
                new_settings[key_value] = new_value_str

            config_manager.validate_setting(key_value, new_settings[key_value])

        return new_settings

    def save_settings(self):
        try:
            new_settings = self.collect_settings()
            self.setting_value_list = config_manager.save_setting(new_settings)

        except E.ConfigurationError as e:
            print(f"Invalid Input: {e}")
            QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                           f"{E.describe(e)}\n\n{e.message}\n\nPlease correct your input.")
            return  # Stop saving!

        self.settings_saved.emit()
        self.accept()
        self.update_darkmode()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    initial_delay = 500
    repeat_interval = 100
    MAX_FONT_SIZE = 46
    MIN_FONT_SIZE = 10

    def __init__(self, engine=None):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.engine = engine if engine is not None else CalculatorEngine()
        self.was_held = False
        self.held_key = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.button_objects = {}  # Key name -> button
        self.setWindowTitle("Calculator")
        self.resize(320, 480)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSizeF(self.MAX_FONT_SIZE)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Keypad Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for i in range(6):
            button_grid.setRowStretch(i, 1)
        for j in range(4):
            button_grid.setColumnStretch(j, 1)

        for text, row, col, col_span, key in BUTTONS:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)

            if key in HOLD_BUTTONS:
                # Use press/release signals for hold logic
                button.pressed.connect(lambda val=key: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=key: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=key: self.handle_button_press(val))

            button_grid.addWidget(button, row, col, 1, col_span)
            self.button_objects[key] = button

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.update_darkmode()
        self.refresh_display()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, key):
        self.was_held = False
        self.held_key = key
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_key = None

    def handle_button_clicked_hold(self, key):
        # A click after a hold was already handled by the repeats
        if not self.was_held:
            self.handle_button_press(key)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)

        if self.held_key:
            self.handle_button_press(self.held_key)

    # --- Window/Key Event Handlers ---
    def resizeEvent(self, event):
        super().resizeEvent(event)

        for button_instance in self.button_objects.values():
            # Scale the button font with the button height
            font_size = max(12, button_instance.height() / 4)
            font = button_instance.font()
            font.setPointSizeF(font_size)
            button_instance.setFont(font)

        self.update_font_size_display()

    def keyPressEvent(self, event):
        key = key_name(event.key(), event.text())
        if key and self.run_command(KeyboardMapping.dispatch_key, self.engine, key):
            event.accept()
            return
        super().keyPressEvent(event)

    def handle_button_press(self, key):
        if key == SETTINGS_KEY:
            self.open_settings()
        elif key == COPY_KEY:
            self.run_command(self.copy_display)
        else:
            self.run_command(KeyboardMapping.dispatch_key, self.engine, key)

    def run_command(self, command, *args):
        """Run command, show any error as a dialog and refresh the display."""
        try:
            return command(*args)

        except E.CalculatorError as e:
            self.show_error(e)

        except Exception as e:
            self.show_error(E.CalculatorError(f"Unexpected crash: {e}", code="9999"))

        finally:
            self.refresh_display()

    # --- Rendering ---
    def refresh_display(self):
        self.display.setText(format_display(
            self.engine.display_value,
            locale=self.setting_value_list["locale"],
            max_fraction_digits=self.setting_value_list["max_fraction_digits"],
        ))
        self.button_objects[KeyboardMapping.CLEAR].setText(clear_label(self.engine.display_value))
        self.update_font_size_display()

    def update_font_size_display(self):
        # --- Dynamic Font Resizing for Display ---
        current_text = self.display.text()

        font = self.display.font()
        current_size = font.pointSizeF()
        fm = QtGui.QFontMetrics(font)

        # Calculate available width inside the QLineEdit
        margins = self.display.textMargins()
        available_width = self.display.width() - (margins.left() + margins.right() + 10)
        text_width = fm.horizontalAdvance(current_text)

        # --- Shrink font if too big ---
        while text_width > available_width and current_size > self.MIN_FONT_SIZE:
            current_size -= 0.5
            font.setPointSizeF(current_size)
            fm = QtGui.QFontMetrics(font)
            text_width = fm.horizontalAdvance(current_text)

        # --- Grow font if too small ---
        while current_size < self.MAX_FONT_SIZE:
            font.setPointSizeF(current_size + 0.5)
            if QtGui.QFontMetrics(font).horizontalAdvance(current_text) > available_width:
                break
            current_size += 0.5

        font.setPointSizeF(current_size)
        self.display.setFont(font)

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            for key, button in self.button_objects.items():
                if key in OPERATOR_KEYS:
                    button.setStyleSheet("background-color: #ff9500; color: white; font-weight: bold;")
                else:
                    button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")

        else:
            for key, button in self.button_objects.items():
                if key in OPERATOR_KEYS:
                    button.setStyleSheet("background-color: #ff9500; color: white; font-weight: normal;")
                else:
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")

    # --- Actions ---
    def copy_display(self):
        if self.setting_value_list["copy_formatted"] == True:
            text = self.display.text()
        else:
            text = self.engine.display_value

        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise E.ClipboardError(str(e), code="6001")
        return text

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # Modal, blocks the main window

        # Reload so changes (darkmode, locale) apply right away
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()
        self.refresh_display()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Icon.Critical)
        error_box.setWindowTitle("Calculator error")
        error_box.setText(E.describe(error_obj))
        error_box.setInformativeText(f"Details: {E.ERROR_MESSAGES.get(error_obj.code, '')}{error_obj.message}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.StandardButton.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
