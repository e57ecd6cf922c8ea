"""
Constants used across the gm_assets modules.

Consolidates format version stamps and fixed field sizes so the record
codecs and the command line tool agree on them.
"""

# Timeline record format version (stamped once per record)
TIMELINE_VERSION = 500

# Moment block format version (stamped once per moment inside a timeline)
MOMENT_VERSION = 400

# Drag-and-drop code action format version (stamped once per action)
ACTION_VERSION = 440

# Code actions always carry this many parameter slots, used or not
ACTION_PARAM_SLOTS = 8

# Width of every version / count field in bytes
U32_SIZE = 4

# Pascal string payload encoding
STRING_ENCODING = 'utf-8'
