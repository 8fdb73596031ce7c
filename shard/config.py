"""Shard config loader.

Reads shard.config (YAML) from the project directory.
Caches result after first load. Call _reset_config() in tests.
"""

import copy
import os

import yaml

from shard.errors import ConfigError
from shard.interpreter import NUMBER_FORMATS
from shard.lexer import KEYWORDS, MAX_TOKEN_LENGTH
from shard.parser import PRINT_BUILTIN

_config = None

CONFIG_FILENAME = "shard.config"

MIN_TOKEN_LENGTH = max(len(word) for word in [*KEYWORDS, PRINT_BUILTIN])

DEFAULTS = {
    "lexer": {
        "max_token_length": MAX_TOKEN_LENGTH,
    },
    "output": {
        "number_format": "shortest",
    },
    "log": {
        "verbose": False,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate(config: dict) -> dict:
    for section in DEFAULTS:
        if not isinstance(config[section], dict):
            raise ConfigError(f"{section} must be a mapping, got {type(config[section]).__name__}")

    # A shorter cap would truncate `print` and `else` into plain identifiers
    max_len = config["lexer"]["max_token_length"]
    if not isinstance(max_len, int) or isinstance(max_len, bool) or max_len < MIN_TOKEN_LENGTH:
        raise ConfigError(
            f"lexer.max_token_length must be an integer of at least {MIN_TOKEN_LENGTH}, got {max_len!r}"
        )
    number_format = config["output"]["number_format"]
    if number_format not in NUMBER_FORMATS:
        raise ConfigError(
            f"output.number_format must be one of {', '.join(NUMBER_FORMATS)}, got {number_format!r}"
        )
    return config


def get_config(config_dir: str | None = None) -> dict:
    """Load and return the Shard config, caching after first call."""
    global _config
    if _config is not None:
        return _config

    if config_dir is None:
        config_dir = os.getcwd()

    config_path = os.path.join(config_dir, CONFIG_FILENAME)

    if os.path.exists(config_path):
        with open(config_path) as f:
            try:
                user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid {CONFIG_FILENAME}: {e}")
        if user_config is None:
            _config = copy.deepcopy(DEFAULTS)
        elif isinstance(user_config, dict):
            _config = _validate(_deep_merge(copy.deepcopy(DEFAULTS), user_config))
        else:
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping, got {type(user_config).__name__}")
    else:
        _config = copy.deepcopy(DEFAULTS)

    return _config


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None
