# validation.py
"""
Field validators for the registration forms.

Each validator returns the cleaned value or raises ValidationError carrying
the name of the offending field, so the UI can report it next to the input.
"""

import re
from datetime import date

from app_types import CategoryType, Position
from constants import (
    MIN_PLACE_LENGTH,
    MIN_PLAYER_NAME_LENGTH,
    MIN_TOURNAMENT_NAME_LENGTH,
    RUT_PATTERN,
    TIME_PATTERN,
)
from exceptions import ValidationError

_RUT_RE = re.compile(RUT_PATTERN)
_TIME_RE = re.compile(TIME_PATTERN)


def _clean_text(value, field: str, min_length: int, label: str) -> str:
    text = "" if value is None else str(value).strip()
    if len(text) < min_length:
        raise ValidationError(
            f"{label} must have at least {min_length} characters.", field=field
        )
    return text


def validate_player_name(name) -> str:
    return _clean_text(name, "name", MIN_PLAYER_NAME_LENGTH, "Player name")


def validate_rut(rut) -> str:
    """Checks the 12345678-9 / 1234567-K format and upper-cases the check digit."""
    text = "" if rut is None else str(rut).strip()
    if not _RUT_RE.match(text):
        raise ValidationError(
            "Invalid RUT. Format: 12345678-9 or 12345678-K.", field="rut"
        )
    return text.upper()


def validate_position(position) -> Position:
    try:
        return Position(position)
    except ValueError:
        raise ValidationError(
            f"Position must be one of: {', '.join(p.value for p in Position)}.",
            field="position",
        ) from None


def validate_category_type(category_type) -> CategoryType:
    try:
        return CategoryType(category_type)
    except ValueError:
        raise ValidationError(
            f"Category type must be one of: {', '.join(t.value for t in CategoryType)}.",
            field="type",
        ) from None


def validate_category_level(level) -> str:
    return _clean_text(level, "level", 1, "Category level")


def validate_tournament_name(name) -> str:
    return _clean_text(name, "name", MIN_TOURNAMENT_NAME_LENGTH, "Tournament name")


def validate_place(place) -> str:
    return _clean_text(place, "place", MIN_PLACE_LENGTH, "Place")


def validate_time(time) -> str:
    """Checks a 24-hour HH:MM string."""
    text = "" if time is None else str(time).strip()
    if not _TIME_RE.match(text):
        raise ValidationError("Invalid time format (HH:MM).", field="time")
    return text


def validate_date(value) -> date:
    if not isinstance(value, date):
        raise ValidationError("Date is required.", field="date")
    return value
