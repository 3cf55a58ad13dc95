# CalculatorEngine.py
"""""
Core state machine of the Pocket Calculator.

Model
-----
The calculator is a sequential left-to-right machine, not an expression evaluator.
Its whole state is one immutable CalculatorState:

    value               operand committed by the previous operator (None at start)
    display_value       text of the current entry, kept as a string on purpose
    operator            pending operator, one of + - * / = (None at start)
    waiting_for_operand next digit starts a new number instead of appending

Every command builds a new CalculatorState and swaps it in, so a caller never
sees a half-updated state and tests can snapshot before/after.

Numeric degeneracies (x/0, overflow, a display of "-") are not errors: they flow
through as inf/nan and are rendered by DisplayFormatter.
"""""

import math
import re
from dataclasses import asdict, dataclass, replace
from decimal import Decimal

from . import error as E

# Debug toggle for optional prints in this module
debug = False

INITIAL_DISPLAY = "0"


# -----------------------------
# Utilities / number text helpers
# -----------------------------

_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)


def parse_float(text):
    """Parse the longest numeric prefix of text, like a browser parseFloat.

    Returns nan when there is no numeric prefix at all ("", "-", "abc").
    Numbers are passed straight to float().
    """
    if not isinstance(text, str):
        return float(text)
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


def number_to_string(number):
    """Default text form of a computed number.

    Integral values print without the '.0' Python would add (8.0 -> "8").
    Other values between 1e-6 and 1e21 print positionally with the shortest
    round-trip digits (1e-05 -> "0.00001"). Outside that range the exponent
    form is kept, written without padding ("1e-7", "1.5e+21").
    """
    number = float(number)
    if not math.isfinite(number):
        return repr(number)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))

    text = repr(number)
    if "e" not in text:
        return text
    if 1e-6 <= abs(number) < 1e21:
        return format(Decimal(text), "f")

    mantissa, exponent = text.split("e")
    exponent = int(exponent)
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


_LEADING_INTEGER = re.compile(r"^-?\d*\.?")


def fraction_digits(display_value):
    """Number of characters after the integer part and the dot ("1.250" -> 3)."""
    return len(_LEADING_INTEGER.sub("", display_value, count=1))


def isDigit(digit):
    """Return True for the ints 0-9 (bools are not digits)."""
    return isinstance(digit, int) and not isinstance(digit, bool) and 0 <= digit <= 9


# -----------------------------
# Binary operation table
# -----------------------------

def _divide(prev_value, next_value):
    # IEEE-754 semantics instead of ZeroDivisionError
    if next_value == 0:
        if prev_value == 0 or math.isnan(prev_value):
            return math.nan
        return math.copysign(math.inf, prev_value) * math.copysign(1.0, next_value)
    return prev_value / next_value


CalculatorOperations = {
    "/": _divide,
    "*": lambda prev_value, next_value: prev_value * next_value,
    "+": lambda prev_value, next_value: prev_value + next_value,
    "-": lambda prev_value, next_value: prev_value - next_value,
    "=": lambda prev_value, next_value: next_value,
}

Operations = list(CalculatorOperations)


def isOp(symbol):
    """Return True if symbol is a key of the operation table."""
    return isinstance(symbol, str) and symbol in CalculatorOperations


# -----------------------------
# State
# -----------------------------

@dataclass(frozen=True)
class CalculatorState:
    value: float = None
    display_value: str = INITIAL_DISPLAY
    operator: str = None
    waiting_for_operand: bool = False


INITIAL_STATE = CalculatorState()


class CalculatorEngine:
    """Owns one CalculatorState and replaces it on every command."""

    def __init__(self, state=None):
        self._state = state if state is not None else INITIAL_STATE

    # --- Readout ---
    @property
    def state(self):
        return self._state

    @property
    def display_value(self):
        return self._state.display_value

    @property
    def value(self):
        return self._state.value

    @property
    def operator(self):
        return self._state.operator

    @property
    def waiting_for_operand(self):
        return self._state.waiting_for_operand

    def _commit(self, command, **changes):
        # Whole-state replacement; no field of the current state is mutated.
        new_state = replace(self._state, **changes)
        if debug:
            print(f"[engine] {command}: {self._state} -> {new_state}")
        self._state = new_state
        return new_state

    # --- Commands ---
    def clear_all(self):
        """Full clear (AC): back to the construction state."""
        return self._commit("clear_all", **asdict(INITIAL_STATE))

    def clear_display(self):
        """Soft clear (C): only the entry is reset."""
        return self._commit("clear_display", display_value=INITIAL_DISPLAY)

    def backspace(self):
        display_value = self._state.display_value
        return self._commit("backspace", display_value=display_value[:-1] or INITIAL_DISPLAY)

    def toggle_sign(self):
        new_value = parse_float(self._state.display_value) * -1
        return self._commit("toggle_sign", display_value=number_to_string(new_value))

    def input_percent(self):
        display_value = self._state.display_value
        current_value = parse_float(display_value)

        if current_value == 0:
            return self._state

        # Dividing by 100 shifts two more digits behind the dot
        fixed_digits = fraction_digits(display_value) + 2
        new_value = current_value / 100
        if not math.isfinite(new_value) or abs(new_value) >= 1e21:
            # Fixed-point text is only used below 1e21
            return self._commit("input_percent", display_value=number_to_string(new_value))
        return self._commit("input_percent", display_value=f"{new_value:.{fixed_digits}f}")

    def input_dot(self):
        display_value = self._state.display_value

        if "." in display_value:
            return self._state

        return self._commit("input_dot", display_value=display_value + ".", waiting_for_operand=False)

    def input_digit(self, digit):
        if not isDigit(digit):
            raise E.InputError(f"{digit!r} is not a digit between 0 and 9.", code="3001", key=digit)

        state = self._state

        if state.waiting_for_operand:
            return self._commit("input_digit", display_value=str(digit), waiting_for_operand=False)

        if state.display_value == INITIAL_DISPLAY:
            return self._commit("input_digit", display_value=str(digit))

        return self._commit("input_digit", display_value=state.display_value + str(digit))

    def perform_operation(self, next_operator):
        if not isOp(next_operator):
            raise E.InputError(f"{next_operator!r} is not one of {' '.join(Operations)}.",
                               code="3004", key=next_operator)

        state = self._state
        input_value = parse_float(state.display_value)
        changes = {"operator": next_operator, "waiting_for_operand": True}

        if state.value is None:
            # First operand: the display becomes the stored value, no arithmetic
            changes["value"] = input_value

        elif state.operator is not None:
            current_value = state.value
            if not current_value or math.isnan(current_value):
                current_value = 0.0
            new_value = CalculatorOperations[state.operator](current_value, input_value)
            changes["value"] = new_value
            changes["display_value"] = number_to_string(new_value)

        return self._commit(f"perform_operation({next_operator})", **changes)

