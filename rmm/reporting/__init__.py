"""CSV and HTML reports for ranked suggestions."""

from .reports import write_suggestions_report

__all__ = ["write_suggestions_report"]
