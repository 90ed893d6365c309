"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  When
ruff itself fails, its own exit code is returned instead of any of
these.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed and ruff reported success."""

GENERAL_ERROR: int = 1
"""A known WsfmtError was caught. User-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
