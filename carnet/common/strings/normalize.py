# carnet/common/strings/normalize.py
from __future__ import annotations

import re
from typing import List, Optional

_WHITESPACE = re.compile(r"\s+")


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def is_blank(s: Optional[str]) -> bool:
    return s is None or not s.strip()


def capitalize_first_letter(s: str) -> str:
    """'mARIE' -> 'Marie'. Empty strings pass through unchanged."""
    if not s:
        return s
    return s[:1].upper() + s[1:].lower()


def normalize_last_name(s: Optional[str]) -> Optional[str]:
    if s is None:
        return None
    return s.strip().upper()


def normalize_first_name(s: Optional[str]) -> Optional[str]:
    if s is None:
        return None
    return capitalize_first_letter(s.strip())


def normalize_address(s: Optional[str]) -> Optional[str]:
    if not s:
        return s
    return s.strip()


def normalize_phone(s: Optional[str]) -> Optional[str]:
    # drop every whitespace char, not only the outer ones: "06 12 34" -> "061234"
    if s is None:
        return None
    return _WHITESPACE.sub("", s)
