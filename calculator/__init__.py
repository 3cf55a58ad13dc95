"""
Pocket Calculator: a sequential keypad calculator.

CalculatorEngine holds the state machine, DisplayFormatter renders its display
text, KeyboardMapping turns key names into commands and UI is the PySide6 window.
"""
