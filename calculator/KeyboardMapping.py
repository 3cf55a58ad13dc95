# KeyboardMapping.py
"""""
Translates key names into engine commands.

Used by the Qt window (keyPressEvent and the keypad buttons) and by the console
harness in main.py. Key names are the typed character ("7", "+", ".", "%") or one
of the named keys below.
"""""

from .CalculatorEngine import CalculatorOperations

ENTER = "Enter"
BACKSPACE = "Backspace"
CLEAR = "Clear"
ESCAPE = "Escape"
TOGGLE_SIGN = "+/-"

CLEAR_KEYS = [CLEAR, ESCAPE]
DIGIT_KEYS = [str(digit) for digit in range(10)]


def press_clear(engine):
    """Clear key: soft clear while something is entered, full clear otherwise."""
    if engine.display_value != "0":
        return engine.clear_display()
    return engine.clear_all()


def dispatch_key(engine, key):
    """Run the command bound to key on engine.

    Returns True if the key was consumed, False if it is not bound
    (the caller may then pass the event on).
    """
    if key == ENTER:
        key = "="

    if key in DIGIT_KEYS:
        engine.input_digit(int(key))
    elif key in CalculatorOperations:
        engine.perform_operation(key)
    elif key == ".":
        engine.input_dot()
    elif key == "%":
        engine.input_percent()
    elif key == TOGGLE_SIGN:
        engine.toggle_sign()
    elif key == BACKSPACE:
        engine.backspace()
    elif key in CLEAR_KEYS:
        press_clear(engine)
    else:
        return False
    return True
