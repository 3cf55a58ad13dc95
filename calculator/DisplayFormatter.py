# DisplayFormatter.py
"""""
Renders the engine's display text for the user.

    "1234.5"  -> "1,234.5"     (grouping per locale, max. 6 fraction digits)
    "3.40"    -> "3.40"        (typed trailing zeros survive)
    "3."      -> "3."          (a dot just typed stays visible)
    "inf"     -> "inf"         (degenerate floats are shown as Python prints them)

The result is for display only. It is never handed back to the engine.
"""""

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

from PySide6.QtCore import QLocale

from . import config_manager as config_manager
from .CalculatorEngine import number_to_string, parse_float

MAX_FRACTION_DIGITS = 6

# Enough digits to quantize any finite float to the largest fraction setting
_ROUNDING_CONTEXT = Context(prec=400)

# Whole match starts at the first '.', group 1 is the trailing run of zeros
_TRAILING_ZEROS = re.compile(r"\.\d*?(0*)$")
_NON_ZERO_DIGIT = re.compile(r"[1-9]")


def resolve_locale(name=None):
    """Return a QLocale for name, the configured locale, or the system locale.

    name may be a QLocale already, a locale name like "de_DE" / "en-US",
    or None/"" to use the 'locale' setting (and the system locale if that is empty).
    """
    if isinstance(name, QLocale):
        return name
    if name is None:
        name = config_manager.load_setting_value("locale")
    if not name:
        return QLocale.system()
    return QLocale(str(name).replace("-", "_"))


def format_number(number, locale=None, max_fraction_digits=MAX_FRACTION_DIGITS):
    """Locale-aware rendering of a float with grouping and trimmed fraction."""
    if not math.isfinite(number):
        return repr(number)

    qlocale = resolve_locale(locale)
    # Ties round away from zero (0.0078125 -> 0.007813)
    step = Decimal(1).scaleb(-max_fraction_digits)
    rounded = float(Decimal(repr(number)).quantize(step, rounding=ROUND_HALF_UP,
                                                     context=_ROUNDING_CONTEXT))
    text = qlocale.toString(rounded, "f", max_fraction_digits)

    decimal_point = qlocale.decimalPoint()
    if max_fraction_digits > 0 and decimal_point in text:
        text = text.rstrip("0").rstrip(decimal_point)
    return text


def format_display(raw, locale=None, max_fraction_digits=None):
    """Format the engine's display_value (or any number) for the display widget."""
    if max_fraction_digits is None:
        max_fraction_digits = config_manager.load_setting_value("max_fraction_digits")

    raw_text = raw if isinstance(raw, str) else number_to_string(raw)
    formatted_value = format_number(parse_float(raw_text), locale, max_fraction_digits)

    # Re-append zeros the numeric rendering dropped ("3.40", "3.00", "3.")
    match = _TRAILING_ZEROS.search(raw_text)
    if match:
        if _NON_ZERO_DIGIT.search(match.group(0)):
            formatted_value += match.group(1)
        else:
            formatted_value += match.group(0)

    return formatted_value


def clear_label(display_value):
    """Legend of the clear key: soft clear 'C' while there is an entry, else 'AC'."""
    return "C" if display_value != "0" else "AC"
