from datetime import date

import pytest

from app_types import CategoryType, Position
from exceptions import ValidationError
from validation import (
    validate_category_type,
    validate_date,
    validate_place,
    validate_player_name,
    validate_position,
    validate_rut,
    validate_time,
    validate_tournament_name,
)


@pytest.mark.parametrize("rut", ["12345678-9", "1234567-0", "12345678-K"])
def test_valid_ruts(rut):
    assert validate_rut(rut) == rut


def test_rut_check_digit_is_upper_cased():
    assert validate_rut(" 1234567-k") == "1234567-K"


@pytest.mark.parametrize("rut", [None, "", "12345678", "123456789-1", "12345678-X", "12.345.678-9"])
def test_invalid_ruts(rut):
    with pytest.raises(ValidationError) as exc_info:
        validate_rut(rut)
    assert exc_info.value.field == "rut"


@pytest.mark.parametrize("time", ["00:00", "09:05", "23:59"])
def test_valid_times(time):
    assert validate_time(time) == time


@pytest.mark.parametrize("time", [None, "", "24:00", "12:60", "7:30", "12-30"])
def test_invalid_times(time):
    with pytest.raises(ValidationError) as exc_info:
        validate_time(time)
    assert exc_info.value.field == "time"


def test_text_fields_are_stripped_and_length_checked():
    assert validate_player_name("  Al ") == "Al"
    assert validate_tournament_name("Copa") == "Copa"
    assert validate_place(" Club ") == "Club"

    with pytest.raises(ValidationError):
        validate_player_name(" A ")
    with pytest.raises(ValidationError):
        validate_tournament_name("ab")
    with pytest.raises(ValidationError):
        validate_place(None)


def test_enums_accept_values_and_members():
    assert validate_position("ambos") is Position.AMBOS
    assert validate_position(Position.DRIVE) is Position.DRIVE
    assert validate_category_type("damas") is CategoryType.DAMAS


def test_date_is_required():
    assert validate_date(date(2026, 5, 1)) == date(2026, 5, 1)
    with pytest.raises(ValidationError) as exc_info:
        validate_date(None)
    assert exc_info.value.field == "date"
