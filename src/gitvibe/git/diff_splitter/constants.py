"""Constants for diff chunking."""

from typing import Final

# A window may be shortened to the last newline only if that keeps at least
# this fraction of the window.
LINE_BREAK_WINDOW: Final = 0.8

# Defaults used when a profile does not override them.
DEFAULT_MAX_DIFF_SIZE: Final = 50_000
DEFAULT_MAX_CHUNK_SIZE: Final = 4_000
DEFAULT_CHUNK_OVERLAP: Final = 200
DEFAULT_MAX_COMMIT_CHUNK_SIZE: Final = 20_000
DEFAULT_CONCURRENCY: Final = 4
