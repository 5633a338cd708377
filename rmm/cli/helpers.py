from __future__ import annotations
import click

from ..config import load_typed_config
from ..version import __version__
from ..utils.output import error

# Import shared utilities
from .shared import get_data_source


@click.group()
@click.version_option(version=__version__, prog_name="rally-matchmaker")
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='Override configured log level')
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Tennis and padel opponent suggestions.

    \b
    TYPICAL WORKFLOWS:

    \b
    Suggest opponents for one of your availabilities:
      rmm suggest USER_ID AVAILABILITY_ID
      rmm suggest USER_ID AVAILABILITY_ID --top 5 --report

    \b
    Understand why someone is (not) suggested:
      rmm diagnose USER_ID AVAILABILITY_ID CANDIDATE_AVAILABILITY_ID

    \b
    Inspect effective settings:
      rmm config --section ranking

    \b
    Settings come from defaults, then .env, then RMM__SECTION__KEY
    environment variables (e.g. RMM__RANKING__MIN_SCORE=15).
    """
    if isinstance(ctx.obj, dict):
        ctx.obj = ctx.obj
    else:
        overrides = {'log_level': log_level.upper()} if log_level else None
        try:
            ctx.obj = load_typed_config(overrides).to_dict()
        except (ValueError, TypeError) as e:
            raise click.ClickException(f"Invalid configuration: {e}")


def load_data_source_or_exit(ctx: click.Context, snapshot: str | None):
    """Load the snapshot for a command, exiting with a readable message on failure."""
    try:
        return get_data_source(ctx.obj, snapshot)
    except FileNotFoundError as e:
        click.echo(error(f"Snapshot not found: {e.filename or snapshot}"), err=True)
        ctx.exit(1)
    except ValueError as e:
        click.echo(error(f"Could not read snapshot: {e}"), err=True)
        ctx.exit(1)


__all__ = ["cli", "get_data_source", "load_data_source_or_exit"]
