"""Candidate diagnostic command."""

from __future__ import annotations
import click
import logging

from .helpers import cli, load_data_source_or_exit
from ..match.errors import InvalidInputError
from ..services.diagnostic_service import diagnose_candidate, format_diagnostic_output
from ..utils.output import section_header

logger = logging.getLogger(__name__)


@cli.command()
@click.argument("user_id")
@click.argument("availability_id")
@click.argument("candidate_availability_id")
@click.option('--snapshot', type=click.Path(dir_okay=False), default=None,
              help='Snapshot JSON to read from (default: snapshot.path from config)')
@click.pass_context
def diagnose(ctx: click.Context, user_id: str, availability_id: str, candidate_availability_id: str,
             snapshot: str | None):
    """Diagnose why a candidate availability is (not) suggested.

    This command shows, for one requester/candidate pair:
    - Which gate excluded the candidate (own availability, status, overlap, score)
    - The weighted score breakdown when scoring ran
    - The reasons that would be shown next to the suggestion

    Example:
        rmm diagnose USER_ID AVAILABILITY_ID CANDIDATE_AVAILABILITY_ID
    """
    cfg = ctx.obj

    click.echo(section_header(f"Diagnosing candidate: {candidate_availability_id}"))
    click.echo("")

    data_source = load_data_source_or_exit(ctx, snapshot)
    try:
        result = diagnose_candidate(data_source, cfg, user_id, availability_id, candidate_availability_id)
    except InvalidInputError as e:
        raise click.BadParameter(str(e))
    click.echo(format_diagnostic_output(result))
    if not result.found:
        ctx.exit(2)


__all__ = ["diagnose"]
