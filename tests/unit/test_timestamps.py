from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from storage import TIME_FORMAT, format_timestamp, parse_timestamp


def test_layout_constant():
    assert TIME_FORMAT == "2006-01-02 15:04:05.999999999 -0700 MST"


def test_parse_without_fraction():
    got = parse_timestamp("2017-08-31 20:45:10 +0000 UTC")
    assert got == datetime(2017, 8, 31, 20, 45, 10, tzinfo=timezone.utc)


def test_parse_reference_time():
    got = parse_timestamp(TIME_FORMAT)
    assert got.year == 2006
    assert got.microsecond == 999999
    assert got.utcoffset() == timedelta(hours=-7)
    assert got.tzname() == "MST"


@pytest.mark.parametrize(
    "fraction, micro",
    [
        (".5", 500000),
        (".000001", 1),
        (".123456789", 123456),
        (".1234567", 123456),
        (".1234567890", 123456),
        (",5", 500000),
    ],
)
def test_fraction_truncated_to_microseconds(fraction, micro):
    got = parse_timestamp(f"2020-02-29 00:00:00{fraction} +0000 UTC")
    assert got.microsecond == micro


@pytest.mark.parametrize(
    "value, offset",
    [
        ("2021-06-01 12:00:00 +0300 +03", timedelta(hours=3)),
        ("2021-06-01 12:00:00 -0500 -5", timedelta(hours=-5)),
        ("2021-06-01 12:00:00 +0100 GMT+1", timedelta(hours=1)),
        ("2021-06-01 12:00:00 +1000 ChST", timedelta(hours=10)),
        ("2021-06-01 12:00:00 +0800 WITA", timedelta(hours=8)),
        ("2021-06-01 12:00:00 +1030 ACDT", timedelta(hours=10, minutes=30)),
        ("2021-06-01 12:00:00 +1300 NZDT", timedelta(hours=13)),
        ("2021-06-01 12:00:00 +0000 GMT", timedelta(0)),
    ],
)
def test_zone_abbreviations(value, offset):
    assert parse_timestamp(value).utcoffset() == offset


def test_single_digit_hour():
    got = parse_timestamp("2017-01-01 7:05:00 +0000 UTC")
    assert (got.hour, got.minute) == (7, 5)


@pytest.mark.parametrize(
    "value, offset",
    [
        ("2017-01-01 00:00:00 +0060 UTC", timedelta(hours=1)),
        ("2017-01-01 00:00:00 -2300 UTC", timedelta(hours=-23)),
        ("2017-01-01 00:00:00 +2359 UTC", timedelta(hours=23, minutes=59)),
    ],
)
def test_offset_edges_accepted(value, offset):
    assert parse_timestamp(value).utcoffset() == offset


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not-a-date",
        "2017-08-31T20:45:10Z",
        "2017-08-31 20:45:10 +0000",
        "2017-08-31 20:45:10 UTC",
        "2017-08-31 20:45:10. +0000 UTC",
        "2017-13-01 00:00:00 +0000 UTC",
        "2017-02-30 00:00:00 +0000 UTC",
        "2017-01-01 24:00:00 +0000 UTC",
        "2017-01-01 00:00:00 +2500 UTC",
        "2017-01-01 00:00:00 +0061 UTC",
        # a tzinfo offset must stay under one day
        "2017-01-01 00:00:00 +2400 UTC",
        "2017-01-01 00:00:00 +2360 UTC",
        "2017-08-31 20:45:10 +0000 abc",
        "2017-08-31 20:45:10 +0000 Utc",
        "2017-08-31 20:45:10 +0000 UT",
        "2017-08-31 20:45:10 +0000 ABCDEF",
        "2017-08-31 20:45:10 +0000 ABCD",
        "2017-08-31 20:45:10 +0330 +0330",
        "2017-08-31 20:45:10 +0000 GMT+24",
        "2017-08-31 20:45:10 +0000 GMTX",
        "2017-08-31 20:45:10 +0000 UTC extra",
    ],
)
def test_parse_rejects(value):
    with pytest.raises(ValueError) as ei:
        parse_timestamp(value)
    assert f'parsing time "{value}"' in str(ei.value)


def test_format_named_zone_roundtrip():
    text = "2017-08-31 13:45:10.25 -0700 PDT"
    assert format_timestamp(parse_timestamp(text)) == text


@pytest.mark.parametrize(
    "tz, suffix",
    [
        (timezone.utc, "07:08:09 +0000 UTC"),
        (timezone(timedelta(hours=2)), "07:08:09 +0200 +02"),
        (timezone(timedelta(hours=2), "Foo"), "07:08:09 +0200 +02"),
        (timezone(timedelta(hours=-3, minutes=-30)), "10:38:09 +0000 UTC"),
    ],
)
def test_format_unnamed_zones(tz, suffix):
    dt = datetime(2022, 5, 6, 7, 8, 9, tzinfo=tz)
    text = format_timestamp(dt)
    assert text == f"2022-05-06 {suffix}"
    assert parse_timestamp(text) == dt


def test_format_rejects_naive():
    with pytest.raises(ValueError):
        format_timestamp(datetime(2022, 5, 6))
