"""Parsing of formatted numbers embedded in catalog datasets ("Rs 120", "30 minutes")."""
import re
from typing import Union

CURRENCY_TOKENS = ("Rs.", "Rs", "INR", "₹")

# Longest tokens first so "minutes" is stripped before "min".
DURATION_UNITS = (
    ("minutes", 1.0),
    ("minute", 1.0),
    ("mins", 1.0),
    ("min", 1.0),
    ("hours", 60.0),
    ("hour", 60.0),
    ("hrs", 60.0),
    ("hr", 60.0),
    ("days", 1440.0),
    ("day", 1440.0),
)

_NUMBER = re.compile(r"^\d+(?:\.\d+)?$")
_RANGE = re.compile(r"^(\d+(?:\.\d+)?)\s*-\s*\d+(?:\.\d+)?$")

Number = Union[int, float, str]


def clean_text(s: str | None) -> str:
    """Collapse internal whitespace and strip."""
    if not s:
        return ""
    return re.sub(r"\s+", " ", s).strip()


def _strict_number(text: str) -> float:
    text = text.replace(",", "").strip()
    if not _NUMBER.match(text):
        raise ValueError(f"not a number: {text!r}")
    return float(text)


def parse_amount(value: Number) -> float:
    """
    Parse a price such as ``"Rs 120"``, ``"₹1,299"`` or ``40``.

    Only a leading currency token is removed; anything else left over makes
    the value invalid and raises ``ValueError``.
    """
    if isinstance(value, bool):
        raise ValueError(f"not an amount: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = clean_text(value)
    for token in CURRENCY_TOKENS:
        if text.startswith(token):
            text = text[len(token):]
            break
    return _strict_number(text)


def parse_minutes(value: Number) -> float:
    """
    Parse a duration such as ``"30 minutes"``, ``"10-15 min"`` or ``"2-3 days"``
    into minutes. Ranges resolve to their lower bound. Bare numbers are minutes.

    Only one trailing unit is stripped, so compound durations such as
    ``"1 hr 30 min"`` raise ``ValueError`` and the loader drops the record.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = clean_text(value).lower()
    factor = 1.0
    for unit, unit_factor in DURATION_UNITS:
        if text.endswith(unit):
            text = text[: -len(unit)].strip()
            factor = unit_factor
            break
    m = _RANGE.match(text)
    if m:
        return float(m.group(1)) * factor
    return _strict_number(text) * factor
