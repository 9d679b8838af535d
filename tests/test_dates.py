from datetime import date

import pytest

from wellbeing_api.app.core.dates import parse_calendar_date, week_start
from wellbeing_api.app.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "day, monday",
    [
        (date(2024, 5, 6), date(2024, 5, 6)),  # Monday
        (date(2024, 5, 8), date(2024, 5, 6)),  # Wednesday
        (date(2024, 5, 11), date(2024, 5, 6)),  # Saturday
        (date(2024, 5, 12), date(2024, 5, 6)),  # Sunday
        (date(2024, 1, 3), date(2024, 1, 1)),
        (date(2023, 12, 31), date(2023, 12, 25)),  # Sunday across a year boundary
    ],
)
def test_week_start(day, monday):
    assert week_start(day) == monday


def test_parse_plain_date():
    assert parse_calendar_date("2024-05-06") == date(2024, 5, 6)


def test_parse_discards_time_of_day():
    assert parse_calendar_date("2024-05-06T23:59:59") == date(2024, 5, 6)


def test_parse_utc_suffix():
    assert parse_calendar_date("2024-05-06T10:00:00.000Z") == date(2024, 5, 6)


def test_parse_converts_offsets_to_utc():
    assert parse_calendar_date("2024-05-07T01:00:00+03:00") == date(2024, 5, 6)


def test_parse_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_calendar_date("not a date")
