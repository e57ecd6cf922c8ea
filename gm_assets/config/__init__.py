#!/usr/bin/env python3
"""
Config module for parser configuration handling.
"""

from .parser_config import load_parser_options, parse_bool

__all__ = ['load_parser_options', 'parse_bool']
