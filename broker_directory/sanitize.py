"""Normalization of the three free-form search inputs.

None of these raise: anything unusable comes back as "no constraint".
Queries bind every value as a parameter anyway; stripping markup and
pattern characters is a second line of defense.
"""
import re
from typing import Any, Optional

from .models import SPECIALTIES

MAX_TERM_LENGTH = 100
MAX_NEIGHBORHOOD_LENGTH = 50

_UNSAFE_CHARS = re.compile(r"[<>\"'%;()&+]")


def _clean(value: str, max_length: int) -> str:
    return _UNSAFE_CHARS.sub("", value).strip()[:max_length]


def sanitize_search_term(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""
    return _clean(value, MAX_TERM_LENGTH)


def sanitize_specialty(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value in SPECIALTIES else None


def sanitize_neighborhood(value: Any) -> Optional[str]:
    if not value or not isinstance(value, str):
        return None
    return _clean(value, MAX_NEIGHBORHOOD_LENGTH)
