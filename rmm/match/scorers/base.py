"""Shared result type for the per-factor scorers."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..reasons import Reason


@dataclass(frozen=True)
class FactorScore:
    """Unweighted contribution of one factor plus its explanation.

    ``category`` is the machine-readable bucket the factor landed in (e.g.
    ``"friend"``, ``"close"``); ``value`` carries the measured quantity when
    there is one (level delta, distance in km).
    """
    score: float
    category: str
    reason: Reason
    value: Optional[float] = None
