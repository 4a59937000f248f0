import json
import os
from datetime import datetime

from emulator.codec import CODECS
from tools.loader import DECIMAL_MODES

DEFAULT_CONFIG = {
    "codec": "lecture",
    "step_mode": False,
    "step_delay_ms": 300,
    "window": 15,
    "blank_glyph": "_",
    "max_steps": 0,
    "decimal_input": "auto",
    "program_file": "input.txt",
    "log_runs": True,
    "output_directory": "logs/",
    "log_file_prefix": "utm_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "codec": str,
    "step_mode": bool,
    "step_delay_ms": int,
    "window": int,
    "blank_glyph": str,
    "max_steps": int,
    "decimal_input": str,
    "program_file": str,
    "log_runs": bool,
    "output_directory": str,
    "log_file_prefix": str
}


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; don't let true/false pass as a number
        if expected_type is int and isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["codec"] not in CODECS:
        raise ValueError(f"Unknown codec '{config['codec']}', expected one of: {', '.join(CODECS)}")
    if config["window"] < 1:
        raise ValueError("Window half-width must be at least 1.")
    if config["step_delay_ms"] < 0:
        raise ValueError("Step delay cannot be negative.")
    if config["max_steps"] < 0:
        raise ValueError("Max steps cannot be negative (0 disables the cap).")
    if config["decimal_input"] not in DECIMAL_MODES:
        raise ValueError(f"decimal_input must be one of {DECIMAL_MODES}.")
    if len(config["blank_glyph"]) != 1:
        raise ValueError("blank_glyph must be a single character.")


def load_config(path="config/runtime_config.json", verbose=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config


def save_config(config, path="config/runtime_config.json"):
    validate_config(config)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
