"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands. Keep this file minimal to avoid circular
imports and duplication.
"""
from rmm.cli.helpers import cli  # root group
from rmm.cli import suggest_cmds  # noqa: F401
from rmm.cli import diagnose_cmds  # noqa: F401
from rmm.cli import config_cmds  # noqa: F401

__all__ = ["cli"]
