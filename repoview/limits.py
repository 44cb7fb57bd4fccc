"""Size and timing policy knobs for snapshot collection.

These bound the cost of a single collector run; they are not part of any
wire format and may be tuned freely.
"""

from __future__ import annotations

MAX_INLINE_WEBVIEW_BYTES = 2 * 1024 * 1024
MAX_FULL_TEXT_LOAD_BYTES = 1024 * 1024
LARGE_TEXT_PREVIEW_BYTES = 256 * 1024
LARGE_TEXT_PREVIEW_LINES = 4000
MAX_UNTRACKED_DIFF_PREVIEW_LINES = 3000
DEFAULT_SYNTAX_MAX_LINES = 2000
STATUS_POLL_SECONDS = 5.0
GIT_TIMEOUT_SECONDS = 5.0
