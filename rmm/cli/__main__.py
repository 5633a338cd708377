"""Module entry point for `python -m rmm.cli`."""
from __future__ import annotations

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from rmm.cli import cli

    cli()
