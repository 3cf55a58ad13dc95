# error.py
""""" Coded exceptions for the Pocket Calculator.

The arithmetic itself never raises: degenerate results (division by zero, overflow,
unparsable display text) travel through the engine as IEEE special floats.
These classes cover everything around it: invalid commands handed to the engine,
settings that cannot be saved and clipboard failures in the UI.
"""""


class CalculatorError(Exception):
    def __init__(self, message, code="9999", key=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.key = key

    def __str__(self):
        return f"{self.code} {self.message}"


class InputError(CalculatorError):
    pass


class ConfigurationError(CalculatorError):
    pass


class ClipboardError(CalculatorError):
    pass


Error_Dictionary = {

    "3": "Calculator Error",
    "4": "UI Error",
    "5": "Configuration Error",
    "6": "Communication Error",
    "9": "Unexpected Error"

}

# Error codes are structured in:
# 1. Digit: Main Error (see Error_Dictionary)
# 2. Digit: Specification
# 3. and 4. Digit: Error Number

ERROR_MESSAGES = {
    "3001": "Invalid digit: ",  # + digit
    "3004": "Invalid operator: ",  # + operator

    "4001": "Unknown key: ",  # + key

    "5001": "Settings could not be saved: ",  # + reason
    "5002": "Invalid setting value: ",  # + setting

    "6001": "Clipboard not available: ",  # + reason

    "9999": "Unexpected Error: "  # + error
}


def describe(error):
    """Return the dialog headline for an error: 'Error <code>: <category>'."""
    category = Error_Dictionary.get(str(error.code)[:1], "Unknown error")
    return f"Error {error.code}: {category}"
