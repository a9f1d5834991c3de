from datetime import UTC, datetime, timedelta, timezone

import pytest

from companygate.activity import is_active, parse_timestamp
from companygate.errors import DateFormatError

FIXED_NOW = datetime(2023, 6, 1, 12, 0, 0, tzinfo=UTC)


def test_empty_date_is_active() -> None:
    assert is_active("", now=FIXED_NOW) is True


def test_empty_date_is_active_without_clock() -> None:
    assert is_active("") is True


@pytest.mark.parametrize(
    "value",
    [
        "not a date",
        "2021-01-02",
        "2021-01-02T15:04:05",
        "2021-01-02 15:04:05Z",
        "2021-13-02T15:04:05Z",
        "2021-02-30T15:04:05Z",
        "2021-01-02T25:04:05Z",
        "2021-01-02T15:04:05+24:00",
        "2021-01-02t15:04:05z",
        " 2021-01-02T15:04:05Z",
    ],
)
def test_invalid_dates_raise_date_format_error(value: str) -> None:
    with pytest.raises(DateFormatError) as excinfo:
        is_active(value, now=FIXED_NOW)
    assert excinfo.value.value == value


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-02T15:04:05Z",
        "2023-06-01T12:00:00.000001Z",
        "2023-06-01T12:00:00.0000001Z",
        "2023-06-01T14:00:00.000000001+02:00",
        "2023-06-01T13:00:01+01:00",
        "2099-12-31T23:59:59-05:00",
    ],
)
def test_future_closure_is_active(value: str) -> None:
    assert is_active(value, now=FIXED_NOW) is True


@pytest.mark.parametrize(
    "value",
    [
        "2021-01-02T15:04:05Z",
        "2023-06-01T12:00:00Z",
        "2023-06-01T14:00:00+02:00",
        "2023-06-01T11:59:59.999999999Z",
        "2023-06-01T12:00:00.000000000Z",
    ],
)
def test_past_or_current_closure_is_inactive(value: str) -> None:
    assert is_active(value, now=FIXED_NOW) is False


def test_naive_clock_is_treated_as_utc() -> None:
    assert is_active("2023-06-01T12:00:01Z", now=datetime(2023, 6, 1, 12, 0, 0)) is True


def test_parse_timestamp_keeps_offset() -> None:
    parsed = parse_timestamp("2021-01-02T15:04:05.5-03:30")

    assert parsed.utcoffset() == -timedelta(hours=3, minutes=30)
    assert parsed.microsecond == 500000
    assert parsed.astimezone(timezone.utc) == datetime(2021, 1, 2, 18, 34, 5, 500000, tzinfo=UTC)
