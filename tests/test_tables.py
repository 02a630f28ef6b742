# tests/test_tables.py

import logging

import pytest

from convdate.core.errors import (
    DatetimeTooEarlyError,
    TableDatetimeError,
    TableIntegerError,
    TableLineError,
    TableOrderError,
)
from convdate.core.time import Instant
from convdate.core.types import ForwardRow, ReverseRow
from convdate.tables import ForwardTable, ReverseTable, pick_dominant_row

COMPACT = "%Y%m%d%H%M%S"


@pytest.mark.parametrize(
    "line, sep, fmt, expected_dt, expected_offset",
    [
        ("2017-01-02T11:22:33 15", " ", "%Y-%m-%dT%H:%M:%S", Instant.from_fields(2017, 1, 2, 11, 22, 33), 15),
        ("20170102112233,15", ",", COMPACT, Instant.from_fields(2017, 1, 2, 11, 22, 33), 15),
        ("2017-01-02T11:22:33.500 -3\r\n", " ", "%Y-%m-%dT%H:%M:%S%.3f",
         Instant.from_fields(2017, 1, 2, 11, 22, 33, 500_000_000), -3),
    ],
)
def test_forward_row_from_line(line, sep, fmt, expected_dt, expected_offset):
    row = ForwardRow.from_line(line, sep, fmt)
    assert row == ForwardRow(expected_dt, expected_offset)


def test_forward_row_wrong_field_count():
    line = "2017-01-02T11:22:33 15 1"
    with pytest.raises(TableLineError) as ei:
        ForwardRow.from_line(line, " ", "%Y-%m-%dT%H:%M:%S")
    assert ei.value.text == line
    assert str(ei.value) == f"Illegal leap definition: {line}"

    with pytest.raises(TableLineError):
        ForwardRow.from_line("2017-01-02T11:22:33", " ", "%Y-%m-%dT%H:%M:%S")


def test_forward_row_illegal_datetime():
    with pytest.raises(TableDatetimeError) as ei:
        ForwardRow.from_line("2017-01-0211:22:33 15", " ", "%Y-%m-%dT%H:%M:%S")
    assert ei.value.text == "2017-01-0211:22:33"
    assert str(ei.value) == "Illegal leap definition (datetime): 2017-01-0211:22:33"


@pytest.mark.parametrize(
    "line",
    [
        "2017-01-02T11:22:33 1.5",
        "2017-01-02T11:22:33 abc",
        "2017-01-02T11:22:33 1_000",
        "2017-01-02T11:22:33 ",
        "2017-01-02T11:22:33 99999999999999999999",
    ],
)
def test_forward_row_illegal_integer(line):
    with pytest.raises(TableIntegerError) as ei:
        ForwardRow.from_line(line, " ", "%Y-%m-%dT%H:%M:%S")
    assert ei.value.text == line


def test_from_lines_skips_comments_and_blank_lines():
    table = ForwardTable.from_lines(
        ["# TAI-UTC", "", "20120701000000 35", "   ", "20150701000000 36"],
        COMPACT,
    )
    assert len(table) == 2
    assert table[0] == ForwardRow(Instant.from_fields(2012, 7, 1), 35)
    assert table.range == (Instant.from_fields(2012, 7, 1), Instant.from_fields(2015, 7, 1))


def test_from_lines_fails_fast():
    with pytest.raises(TableIntegerError) as ei:
        ForwardTable.from_lines(["20120701000000 35", "20150701000000 x", "garbage"], COMPACT)
    assert ei.value.text == "20150701000000 x"


@pytest.mark.parametrize(
    "lines",
    [
        ["20150701000000 36", "20120701000000 35"],
        ["20150701000000 36", "20150701000000 37"],
    ],
)
def test_from_lines_rejects_unordered(lines):
    with pytest.raises(TableOrderError) as ei:
        ForwardTable.from_lines(lines, COMPACT)
    assert ei.value.text == lines[1]


def test_constructor_rejects_unordered():
    rows = (
        ForwardRow(Instant.from_fields(2015, 7, 1), 36),
        ForwardRow(Instant.from_fields(2012, 7, 1), 35),
    )
    with pytest.raises(TableOrderError):
        ForwardTable(rows)


@pytest.fixture
def forward():
    return ForwardTable.from_lines(["20120701000000 35", "20150701000000 36"], COMPACT)


def test_pick_dominant_row_inclusive_lower_bound(forward):
    assert forward.pick_dominant_row(Instant.from_fields(2012, 7, 1)) is forward[0]
    assert forward.pick_dominant_row(Instant.from_fields(2015, 6, 30, 23, 59, 60)) is forward[0]
    assert forward.pick_dominant_row(Instant.from_fields(2015, 7, 1)) is forward[1]
    assert pick_dominant_row(forward, Instant.from_fields(2030, 1, 1)) is forward[1]


def test_pick_dominant_row_too_early(forward):
    with pytest.raises(DatetimeTooEarlyError) as ei:
        forward.pick_dominant_row(Instant.from_fields(2012, 6, 30, 23, 59, 60))
    assert ei.value.text == "2012-06-30 23:59:60"
    assert str(ei.value) == "The datetime is too low: 2012-06-30 23:59:60"


def test_reverse_derivation():
    forward = ForwardTable.from_lines(
        ["20120701000000 35", "20150701000000 36", "20170101000000 35"], COMPACT
    )
    reverse = ReverseTable.from_forward(forward)
    assert list(reverse) == [
        ReverseRow(Instant.from_fields(2012, 7, 1, 0, 0, 35), -35, 0),
        ReverseRow(Instant.from_fields(2015, 7, 1, 0, 0, 35), -36, 1),
        ReverseRow(Instant.from_fields(2015, 7, 1, 0, 0, 36), -36, 0),
        ReverseRow(Instant.from_fields(2017, 1, 1, 0, 0, 35), -35, 0),
    ]
    assert [r.is_transitional for r in reverse] == [False, True, False, False]


def test_reverse_derivation_multi_second_steps():
    forward = ForwardTable.from_lines(
        ["20150701000000 36", "20170101000000 37", "20180101000000 36",
         "20190101000000 38", "20200101000000 36"],
        COMPACT,
    )
    reverse = ReverseTable.from_forward(forward)
    assert len(reverse) == 7
    assert reverse[4] == ReverseRow(Instant.from_fields(2019, 1, 1, 0, 0, 36), -38, 2)
    assert reverse.keys == tuple(sorted(reverse.keys))


def test_reverse_derivation_warns_on_large_step(caplog):
    forward = ForwardTable.from_lines(["20150701000000 36", "20170101000000 40"], COMPACT)
    with caplog.at_level(logging.WARNING, logger="convdate.tables"):
        ReverseTable.from_forward(forward)
    assert "beyond historical experience" in caplog.text


def test_reverse_row_correction_range():
    with pytest.raises(ValueError):
        ReverseRow(Instant(0), 0, 60)
    with pytest.raises(ValueError):
        ReverseRow(Instant(0), 0, -1)


def test_empty_table_has_no_range():
    table = ForwardTable.from_lines(["# nothing yet", ""], COMPACT)
    assert len(table) == 0
    assert table.range is None
