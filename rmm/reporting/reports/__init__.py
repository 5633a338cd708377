"""Individual report generators."""

from .suggestions import write_suggestions_report

__all__ = [
    'write_suggestions_report',
]
