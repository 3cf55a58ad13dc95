"""
Shared fixtures: every test runs against its own config.json / ui_strings.json
in a temporary directory, with a fixed en_US number locale.
"""

import json

import pytest

from calculator import config_manager
from calculator.CalculatorEngine import CalculatorEngine


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    strings_file = tmp_path / "ui_strings.json"

    settings = dict(config_manager.DEFAULT_SETTINGS, locale="en_US")
    config_file.write_text(json.dumps(settings), encoding="utf-8")
    strings_file.write_text(json.dumps(config_manager.DEFAULT_DESCRIPTIONS), encoding="utf-8")

    monkeypatch.setattr(config_manager, "config_json", config_file)
    monkeypatch.setattr(config_manager, "ui_strings", strings_file)
    return config_file


@pytest.fixture
def engine():
    return CalculatorEngine()


@pytest.fixture
def press(engine):
    """Feed digits (ints) and command names (strs) to the engine fixture."""

    def _press(*keys):
        commands = {
            ".": engine.input_dot,
            "%": engine.input_percent,
            "+/-": engine.toggle_sign,
            "<": engine.backspace,
            "C": engine.clear_display,
            "AC": engine.clear_all,
        }
        for key in keys:
            if isinstance(key, int):
                engine.input_digit(key)
            elif key in commands:
                commands[key]()
            else:
                engine.perform_operation(key)
        return engine.state

    return _press
