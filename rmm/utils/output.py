"""Output formatting utilities for consistent CLI reporting."""

import click
from pathlib import Path


def section_header(text: str) -> str:
    """Format a section header with color.

    Args:
        text: Header text

    Returns:
        Formatted header string
    """
    return click.style(f"▶ {text}", fg='cyan', bold=True)


def success(text: str, prefix: str = "✓") -> str:
    """Format a success message."""
    return f"{click.style(prefix, fg='green')} {text}"


def error(text: str, prefix: str = "✗") -> str:
    """Format an error message."""
    return f"{click.style(prefix, fg='red')} {text}"


def warning(text: str, prefix: str = "⚠") -> str:
    """Format a warning message."""
    return f"{click.style(prefix, fg='yellow')} {text}"


def info(text: str) -> str:
    """Format an info message."""
    return f"  {click.style('•', fg='blue')} {text}"


def score_value(score: float) -> str:
    """Color a candidate score: green for strong, yellow for middling, plain otherwise.

    Args:
        score: Final weighted candidate score

    Returns:
        Styled score string with two decimals
    """
    text = f"{score:.2f}"
    if score >= 150:
        return click.style(text, fg='green', bold=True)
    if score >= 80:
        return click.style(text, fg='yellow')
    return text


def report_files(csv_path: Path | str, html_path: Path | str, label: str) -> str:
    """Format report file paths (CSV and HTML).

    Args:
        csv_path: Path to CSV file
        html_path: Path to HTML file
        label: Report label

    Returns:
        Formatted report files string
    """
    csv = click.style(str(Path(csv_path).resolve()), fg='yellow')
    html = click.style(str(Path(html_path).resolve()), fg='yellow')
    return f"  {click.style('•', fg='blue')} {label}:\n    CSV:  {csv}\n    HTML: {html}"


__all__ = ["section_header", "success", "error", "warning", "info", "score_value", "report_files"]
