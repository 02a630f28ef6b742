# tests/test_dtfmt.py

import pytest

from convdate.core.dtfmt import DT_FMT, compile_format, format_datetime, parse_datetime
from convdate.core.time import Instant


def test_default_format_fraction_is_optional_on_input():
    assert parse_datetime("2017-01-02T11:22:33") == Instant.from_fields(2017, 1, 2, 11, 22, 33)
    assert parse_datetime("2017-01-02T11:22:33.1") == Instant.from_fields(2017, 1, 2, 11, 22, 33, 100_000_000)
    assert parse_datetime("2017-01-02T11:22:33.123456789") == Instant.from_fields(
        2017, 1, 2, 11, 22, 33, 123_456_789
    )


def test_default_format_renders_three_digits():
    t = Instant.from_fields(2017, 1, 2, 11, 22, 33)
    assert format_datetime(t) == "2017-01-02T11:22:33.000"
    t = Instant.from_fields(2017, 1, 2, 11, 22, 33, 123_456_789)
    assert format_datetime(t, DT_FMT) == "2017-01-02T11:22:33.123"


def test_leap_second_parse_and_format():
    t = parse_datetime("2016-12-31T23:59:60.123")
    assert t.is_leap
    assert format_datetime(t) == "2016-12-31T23:59:60.123"
    assert format_datetime(Instant.from_fields(2018, 12, 31, 23, 59, 61)) == "2018-12-31T23:59:61.000"


@pytest.mark.parametrize(
    "fmt, nanos, expected",
    [
        ("%T%.f", 0, "01:02:03"),
        ("%T%.f", 120_000_000, "01:02:03.120"),
        ("%T%.f", 123_456_000, "01:02:03.123456"),
        ("%T%.f", 123_456_789, "01:02:03.123456789"),
        ("%T%.6f", 5_000, "01:02:03.000005"),
        ("%T%.9f", 1, "01:02:03.000000001"),
        ("%T.%3f", 123_456_789, "01:02:03.123"),
        ("%T.%f", 123_456_789, "01:02:03.123456"),
    ],
)
def test_fraction_directives(fmt, nanos, expected):
    t = Instant.from_fields(2017, 1, 2, 1, 2, 3, nanos)
    assert format_datetime(t, "%F " + fmt) == "2017-01-02 " + expected


def test_compact_format():
    fmt = "%Y%m%d%H%M%S"
    t = parse_datetime("20170102112233", fmt)
    assert t == Instant.from_fields(2017, 1, 2, 11, 22, 33)
    assert format_datetime(t, fmt) == "20170102112233"


def test_day_of_year():
    fmt = "%Y-%j %H:%M"
    t = parse_datetime("2020-060 06:30", fmt)
    assert t == Instant.from_fields(2020, 2, 29, 6, 30)
    assert format_datetime(t, fmt) == "2020-060 06:30"
    with pytest.raises(ValueError):
        parse_datetime("2019-366 00:00", fmt)


def test_aliases_and_percent_literal():
    t = Instant.from_fields(2017, 1, 2, 11, 22, 33)
    assert format_datetime(t, "%F %T") == "2017-01-02 11:22:33"
    assert format_datetime(t, "%F %%F") == "2017-01-02 %F"
    assert parse_datetime("2017-01-02 %F", "%F %%F") == Instant.from_fields(2017, 1, 2)


def test_missing_time_fields_default_to_midnight():
    assert parse_datetime("2017-01-02", "%Y-%m-%d") == Instant.from_fields(2017, 1, 2)


@pytest.mark.parametrize(
    "text, fmt",
    [
        ("2019-12-31 23:59:57.000", DT_FMT),
        ("2017-01-02T11:22", DT_FMT),
        ("2017-02-30T00:00:00", DT_FMT),
        ("2017-01-02T11:22:33.", DT_FMT),
        ("2017-01-02T11:23:42", "%Y-%m-%d %H:%M:%S"),
    ],
)
def test_parse_rejects(text, fmt):
    with pytest.raises(ValueError):
        parse_datetime(text, fmt)


@pytest.mark.parametrize(
    "fmt",
    [
        "%Y-%m-%d %Q",
        "%Y-%m-%d %",
        "%H:%M:%S",
        "%Y-%m",
        "%Y-%m-%d %Y",
        "%Y-%m-%d %.f %f",
    ],
)
def test_compile_rejects_bad_formats(fmt):
    with pytest.raises(ValueError):
        compile_format(fmt)
