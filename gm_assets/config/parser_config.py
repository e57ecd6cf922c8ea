#!/usr/bin/env python3
"""
Parser Configuration

Loads ParserOptions from an INI file.

INI Format:
    [parser]
    strict = true

A missing file, section or key falls back to the ParserOptions default.
"""

import configparser
from pathlib import Path
from typing import Optional, Union

from ..parsers.base import ParserOptions
from ..utils import logDebug, logWarning

PARSER_SECTION = 'parser'

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


def parse_bool(value: str, key: str = "value") -> bool:
    """Parse an INI boolean, raising ValueError on anything unrecognised."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for '{key}': {value!r}")


def load_parser_options(config_path: Optional[Union[str, Path]] = None) -> ParserOptions:
    """
    Load parser options.

    Args:
        config_path: Path to the INI file, or None for defaults

    Returns:
        ParserOptions instance
    """
    options = ParserOptions()
    if config_path is None:
        return options

    config_path = Path(config_path)
    if not config_path.exists():
        logWarning(f"Parser config not found: {config_path}, using defaults")
        return options

    config = configparser.ConfigParser()
    config.read(config_path, encoding='utf-8')

    if not config.has_section(PARSER_SECTION):
        logDebug(f"No [{PARSER_SECTION}] section in {config_path}")
        return options

    section = config[PARSER_SECTION]
    strict_str = section.get('strict')
    if strict_str is not None:
        options.strict = parse_bool(strict_str, 'strict')

    logDebug(f"Parser options from {config_path}: strict={options.strict}")
    return options
