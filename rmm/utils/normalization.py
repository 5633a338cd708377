from __future__ import annotations
import re
import unicodedata
from functools import lru_cache

_punct_pattern = re.compile(r"[\s\-_.,/]+")
# Words that describe a venue rather than the surface itself
_filler_pattern = re.compile(r"\b(court|courts|surface|terrain|indoor|outdoor|covered)\b")


@lru_cache(maxsize=1024)
def normalize_label(s: str) -> str:
    """Lowercase, strip accents and punctuation, drop venue filler words.

    ``"Terre-Battue (indoor)"`` -> ``"terre battue"``
    """
    s = s.lower().strip()
    # Unicode normalization (handle accents, diacritics)
    s = unicodedata.normalize("NFKD", s)
    s = "".join(c for c in s if not unicodedata.combining(c))
    s = re.sub(r"[\[\](){}]", " ", s)
    s = _punct_pattern.sub(" ", s)
    s = re.sub(r"[^a-z0-9 ]+", "", s)
    s = _filler_pattern.sub(" ", s)
    return " ".join(s.split())


__all__ = ["normalize_label"]
