"""Small utilities."""

from __future__ import annotations

from typing import List, Optional


def split_fields(line: str, sep: str = ",") -> List[str]:
    """Split a delimited record and strip whitespace around each field."""
    return [part.strip() for part in line.strip().split(sep)]


def is_digits(text: str) -> bool:
    # str.isdigit accepts superscripts and other unicode digits
    return bool(text) and all("0" <= ch <= "9" for ch in text)


def parse_positive_int(text: str) -> Optional[int]:
    """Return ``int(text)`` when it is a plain decimal >= 1, else None."""
    if not is_digits(text):
        return None
    value = int(text)
    return value if value >= 1 else None


def is_letters_and_spaces(text: str) -> bool:
    return bool(text) and all(ch.isalpha() or ch == " " for ch in text)
