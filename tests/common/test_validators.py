from datetime import date, datetime

import pytest

from src.gym_attendance.gym_attendance.common.datetime_utils import end_of_day, parse_iso_date, start_of_day
from src.gym_attendance.gym_attendance.common.validators import (
    optional_non_negative_int,
    require_int_in_range,
    require_non_empty,
)
from src.gym_attendance.gym_attendance.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  Ana ", "Name") == "Ana"
    with pytest.raises(ValidationError, match="Name is required"):
        require_non_empty("   ", "Name")


def test_require_int_in_range():
    assert require_int_in_range(3, "n", 1, 7) == 3
    assert require_int_in_range(4.0, "n", 1, 7) == 4
    with pytest.raises(ValidationError):
        require_int_in_range(False, "n", 0, 7)


def test_optional_non_negative_int():
    assert optional_non_negative_int(None, "Sets") is None
    assert optional_non_negative_int(" ", "Sets") is None
    assert optional_non_negative_int("0", "Sets") == 0
    with pytest.raises(ValidationError):
        optional_non_negative_int("x", "Sets")


def test_day_bounds():
    d = parse_iso_date("2025-06-15")

    assert d == date(2025, 6, 15)
    assert start_of_day(d) == datetime(2025, 6, 15)
    assert end_of_day(d) == datetime(2025, 6, 15, 23, 59, 59, 999999)


@pytest.mark.parametrize("value", [2.7, True, False])
def test_optional_non_negative_int_rejects_bool_and_fractions(value):
    with pytest.raises(ValidationError):
        optional_non_negative_int(value, "Sets")


def test_optional_non_negative_int_accepts_whole_float():
    assert optional_non_negative_int(3.0, "Sets") == 3
