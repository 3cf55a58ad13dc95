"""Tests for the coded exceptions."""

from calculator import error as E


def test_error_attributes_and_text():
    error = E.InputError("'x' is not a digit.", code="3001", key="x")
    assert isinstance(error, E.CalculatorError)
    assert error.message == "'x' is not a digit."
    assert error.key == "x"
    assert str(error) == "3001 'x' is not a digit."


def test_default_code_is_unexpected():
    assert E.CalculatorError("boom").code == "9999"


def test_describe_uses_first_digit_category():
    assert E.describe(E.ConfigurationError("bad", code="5002")) == "Error 5002: Configuration Error"
    assert E.describe(E.ClipboardError("none", code="6001")) == "Error 6001: Communication Error"
    assert E.describe(E.CalculatorError("?", code="7000")) == "Error 7000: Unknown error"


def test_every_message_code_has_a_category():
    for code in E.ERROR_MESSAGES:
        assert code[0] in E.Error_Dictionary
