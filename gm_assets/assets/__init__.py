"""
Asset Records

Binary codecs for asset records stored in the project data file.

- code_action: CodeAction, the drag-and-drop action carried by timelines
- timeline: Timeline, a named list of (moment index, actions) pairs
"""

from .code_action import CodeAction, APPLIES_TO_SELF, APPLIES_TO_OTHER
from .timeline import Timeline
