"""Time-window intersection and the minimum-overlap gate."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..reasons import Reason, ReasonCode
from ..results import OverlapRange


@dataclass(frozen=True)
class OverlapResult:
    minutes: float
    overlap_range: Optional[OverlapRange]
    eligible: bool

    @property
    def reason(self) -> Reason:
        return Reason(ReasonCode.OVERLAP, {"minutes": self.minutes})


def compute_overlap(
    start1: datetime,
    end1: datetime,
    start2: datetime,
    end2: datetime,
    min_overlap_minutes: int = 60,
) -> OverlapResult:
    """Intersect two windows and apply the minimum-duration gate.

    The windows may sit on different days; they simply do not intersect then.
    Touching windows (``end1 == start2``) yield 0 minutes. The gate is
    inclusive: exactly ``min_overlap_minutes`` is eligible.

    Returns:
        OverlapResult with non-negative minutes; ``overlap_range`` is None when
        the windows do not intersect at all
    """
    start = max(start1, start2)
    end = min(end1, end2)
    if end <= start:
        return OverlapResult(minutes=0.0, overlap_range=None, eligible=False)
    minutes = (end - start).total_seconds() / 60.0
    return OverlapResult(
        minutes=minutes,
        overlap_range=OverlapRange(start=start, end=end),
        eligible=minutes >= min_overlap_minutes,
    )


__all__ = ["OverlapResult", "compute_overlap"]
