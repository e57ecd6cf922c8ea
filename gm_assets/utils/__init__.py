# Shared utilities
from .logging import (
    log, logWarning, logError, logDebug,
    init_logging, close_logging, print_summary, get_counts,
)
from .binary import write_u32, write_i32, write_bool32, write_pas_string
