"""Opponent suggestion command."""

from __future__ import annotations
import copy
import json as _json
import logging
from pathlib import Path

import click

from .helpers import cli, load_data_source_or_exit
from ..match.errors import InvalidInputError, NotFoundError
from ..reporting import write_suggestions_report
from ..services.suggest_service import run_suggestions
from ..utils.output import error, info, report_files, score_value, section_header, success

logger = logging.getLogger(__name__)


@cli.command()
@click.argument("user_id")
@click.argument("availability_id")
@click.option('--snapshot', type=click.Path(dir_okay=False), default=None,
              help='Snapshot JSON to rank from (default: snapshot.path from config)')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              show_default=True, help='Output format')
@click.option('--top', type=click.IntRange(min=0), default=None,
              help='Show at most N candidates (0 = all; overrides ranking.max_results)')
@click.option('--report', is_flag=True, help='Also write CSV and HTML reports to reports.directory')
@click.pass_context
def suggest(ctx: click.Context, user_id: str, availability_id: str, snapshot: str | None,
            output_format: str, top: int | None, report: bool):
    """Rank opponents for one of USER_ID's availabilities.

    Candidates are other players' open availabilities that overlap the window
    by at least the configured minimum. Each suggestion lists its score and
    the reasons behind it.

    Example:
        rmm suggest 7d1c...e2 0b9a...41 --top 5
    """
    cfg = copy.deepcopy(ctx.obj)
    if top is not None:
        cfg.setdefault('ranking', {})['max_results'] = top

    data_source = load_data_source_or_exit(ctx, snapshot)

    try:
        result = run_suggestions(data_source, cfg, user_id, availability_id)
    except InvalidInputError as e:
        raise click.BadParameter(str(e))
    except NotFoundError as e:
        click.echo(error(str(e)), err=True)
        ctx.exit(2)

    suggestions = result.suggestions
    if output_format == 'json':
        click.echo(_json.dumps(suggestions.to_dict(), indent=2))
    else:
        click.echo(section_header(f"Suggestions for availability {suggestions.availability_id}"))
        if not suggestions.candidates:
            click.echo(info("No candidate passed the overlap and score gates"))
        for rank, candidate in enumerate(suggestions.candidates, start=1):
            click.echo(
                f"{rank:>3}. {candidate.candidate_user_id}  "
                f"(availability {candidate.candidate_availability_id})  score {score_value(candidate.score)}"
            )
            for reason in candidate.reasons:
                click.echo(f"       - {reason}")
        click.echo("")
        click.echo(success(f"{len(suggestions.candidates)} suggestion(s) in {result.duration_seconds:.2f}s"))

    if report:
        out_dir = Path(cfg['reports']['directory'])
        csv_path, html_path = write_suggestions_report(suggestions, result.ranking, out_dir)
        logger.debug(f"Wrote suggestion reports to {out_dir}")
        # Keep JSON output machine-readable
        click.echo(report_files(csv_path, html_path, "Suggestions report"), err=output_format == 'json')


__all__ = ["suggest"]
