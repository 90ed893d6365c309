"""Allow ``python -m wsfmt`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m wsfmt`` behaves identically to the ``wsfmt`` console script.
"""

from __future__ import annotations

from wsfmt.cli.app import cli

if __name__ == "__main__":
    cli()
