"""Match suggestions report generator."""

from html import escape
from pathlib import Path

from ...config_types import RankingConfig
from ...match.reasons import ReasonCode
from ...match.results import MatchSuggestions, ScoredCandidate
from ..formatting import badge_for, format_overlap
from .base import safe_str, write_csv_report, write_html_report

CSV_HEADERS = [
    "rank",
    "candidate_user_id",
    "candidate_player_id",
    "candidate_availability_id",
    "overlap_start",
    "overlap_end",
    "score",
    "availability_points",
    "social_points",
    "level_points",
    "location_points",
    "surface_points",
    "reasons",
]


def _code_of(candidate: ScoredCandidate, prefix: str) -> ReasonCode | None:
    for reason in candidate.reason_codes:
        if reason.code.value.startswith(prefix):
            return reason.code
    return None


def score_composition_html(ranking: RankingConfig) -> str:
    """Describe how the score column is computed, with the weights in effect."""
    return (
        "Candidates are other players' open availabilities sharing at least "
        f"{ranking.min_overlap_minutes} minutes with this window. Score is the weighted sum of:"
        "<ul>"
        f"<li>overlap minutes × {ranking.weight_availability_overlap:g}</li>"
        f"<li>social × {ranking.weight_social_proximity:g} "
        f"(friend {ranking.social_friend_score:g}, played before {ranking.social_previous_opponent_score:g})</li>"
        f"<li>level × {ranking.weight_level_compatibility:g} "
        f"(close {ranking.level_close_score:g}, playable {ranking.level_playable_score:g}, "
        f"unknown {ranking.level_unknown_score:g}, far {ranking.level_far_score:g})</li>"
        f"<li>location × {ranking.weight_location_proximity:g} "
        f"(up to {ranking.location_max_score:g}, zero beyond {ranking.location_radius_km:g} km)</li>"
        f"<li>surface × {ranking.weight_surface:g} (bonus {ranking.surface_match_bonus:g} when preferences agree)</li>"
        "</ul>"
        f"Candidates scoring below {ranking.min_score:g} are not shown."
    )


def write_suggestions_report(
    suggestions: MatchSuggestions,
    ranking: RankingConfig,
    out_dir: Path,
) -> tuple[Path, Path]:
    """Write ranked suggestions for one availability to CSV and HTML.

    Args:
        suggestions: Ranker output (already sorted)
        ranking: Ranking config used, for the score composition note
        out_dir: Output directory for reports

    Returns:
        Tuple of (csv_path, html_path)
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = f"suggestions_{suggestions.availability_id}"
    csv_path = out_dir / f"{stem}.csv"
    html_path = out_dir / f"{stem}.html"

    csv_rows = []
    html_rows = []
    for rank, candidate in enumerate(suggestions.candidates, start=1):
        b = candidate.score_breakdown
        csv_rows.append([
            rank,
            candidate.candidate_user_id,
            safe_str(candidate.candidate_player_id),
            candidate.candidate_availability_id,
            candidate.overlap_range.start.isoformat(),
            candidate.overlap_range.end.isoformat(),
            f"{candidate.score:.2f}",
            f"{b.availability:.2f}",
            f"{b.social:.2f}",
            f"{b.level:.2f}",
            f"{b.location:.2f}",
            f"{b.surface:.2f}",
            "; ".join(candidate.reasons),
        ])

        social = _code_of(candidate, "social_")
        level = _code_of(candidate, "level_")
        reasons_html = "".join(f"<li>{escape(r)}</li>" for r in candidate.reasons)
        html_rows.append([
            rank,
            escape(candidate.candidate_user_id),
            escape(candidate.candidate_availability_id),
            format_overlap(candidate.overlap_range),
            f"{candidate.score:.2f}",
            badge_for(social) if social else "",
            badge_for(level) if level else "",
            f'<ul class="reasons">{reasons_html}</ul>',
        ])

    write_csv_report(csv_path, CSV_HEADERS, csv_rows)
    write_html_report(
        html_path,
        title=f"Match suggestions for {escape(suggestions.availability_id)}",
        columns=["#", "Player", "Availability", "Overlap", "Score", "Social", "Level", "Why"],
        rows=html_rows,
        description=score_composition_html(ranking),
        default_order=[[4, "desc"], [1, "asc"]],
        csv_filename=csv_path.name,
    )
    return csv_path, html_path


__all__ = ["CSV_HEADERS", "score_composition_html", "write_suggestions_report"]
