# config_manager.py
import json
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"

# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "darkmode": False,
    "locale": "",
    "max_fraction_digits": 6,
    "copy_formatted": True,
}

DEFAULT_DESCRIPTIONS = {
    "darkmode": "Dark mode",
    "locale": "Number locale (e.g. en_US, empty = system)",
    "max_fraction_digits": "Maximum fraction digits",
    "copy_formatted": "Copy the formatted number",
}

# Allowed range for integer settings (inclusive)
INT_LIMITS = {
    "max_fraction_digits": (0, 12),
}


def _read_json(path, defaults):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return dict(defaults)

    if not isinstance(loaded, dict):
        return dict(defaults)

    merged = dict(defaults)
    merged.update(loaded)
    return merged


def load_setting_value(key_value):
    settings_dict = _read_json(config_json, DEFAULT_SETTINGS)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    settings_dict = _read_json(ui_strings, DEFAULT_DESCRIPTIONS)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def validate_setting(key_value, value):
    """Return value if it is acceptable for key_value, else raise ConfigurationError."""
    default = DEFAULT_SETTINGS.get(key_value)

    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise E.ConfigurationError(f"'{key_value}' must be True or False.", code="5002", key=key_value)

    elif isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise E.ConfigurationError(f"'{key_value}' must be a whole number.", code="5002", key=key_value)
        low, high = INT_LIMITS.get(key_value, (None, None))
        if low is not None and not low <= value <= high:
            raise E.ConfigurationError(f"'{value}' is out of range. Allowed: {low} to {high}.",
                                       code="5002", key=key_value)

    elif isinstance(default, str):
        if not isinstance(value, str):
            raise E.ConfigurationError(f"'{key_value}' must be text.", code="5002", key=key_value)

    return value


def save_setting(settings_dict):
    for key_value, value in settings_dict.items():
        validate_setting(key_value, value)

    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        raise E.ConfigurationError(f"{config_json}: {e}", code="5001")
