import datetime

from labledger.utils.dates import ceil_days, format_date, parse_timestamp, to_iso

UTC = datetime.UTC


def test_parse_timestamp_accepts_browser_formats():
    assert parse_timestamp("2026-10-19") == datetime.datetime(2026, 10, 19, tzinfo=UTC)
    assert parse_timestamp("2026-10-19T08:30:00.000Z") == datetime.datetime(
        2026, 10, 19, 8, 30, tzinfo=UTC
    )
    assert parse_timestamp("2026-10-19T14:00:00+05:30") == datetime.datetime(
        2026, 10, 19, 8, 30, tzinfo=UTC
    )


def test_parse_timestamp_invalid_values():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("next tuesday") is None


def test_ceil_days_rounds_up_in_both_directions():
    now = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
    assert ceil_days(datetime.datetime(2026, 10, 20, tzinfo=UTC), now) == 1
    assert ceil_days(datetime.datetime(2026, 10, 18, tzinfo=UTC), now) == -1
    assert ceil_days(datetime.datetime(2026, 10, 19, tzinfo=UTC), now) == 0
    assert ceil_days(now, now) == 0


def test_format_date_uses_display_timezone():
    assert format_date("2026-10-19T20:00:00.000Z", "%d/%m/%Y", "UTC") == "19/10/2026"
    assert format_date("2026-10-19T20:00:00.000Z", "%d/%m/%Y", "Asia/Kolkata") == "20/10/2026"
    assert format_date("garbage", "%d/%m/%Y") is None


def test_to_iso_matches_javascript_format():
    moment = datetime.datetime(2026, 10, 19, 8, 5, 3, 120_000, tzinfo=UTC)
    assert to_iso(moment) == "2026-10-19T08:05:03.120Z"
