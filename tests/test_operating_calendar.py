from datetime import time, timedelta

from app.services.calendar.operating_calendar import OperatingCalendar
from conftest import make_business, make_closed_date, make_hours


def test_configured_day_returns_windows(db, weekday_hours, future_monday):
    windows = OperatingCalendar.windows_for(db, weekday_hours.id, future_monday)

    assert windows.open_time == time(9)
    assert windows.close_time == time(18)
    assert windows.break_start == time(12)
    assert windows.break_end == time(13)
    assert windows.is_fallback is False
    assert OperatingCalendar.is_open(db, weekday_hours.id, future_monday)


def test_closed_weekday(db, weekday_hours, future_monday):
    saturday = future_monday + timedelta(days=5)

    assert OperatingCalendar.is_open(db, weekday_hours.id, saturday) is False
    assert OperatingCalendar.windows_for(db, weekday_hours.id, saturday) is None


def test_closed_date_overrides_weekday(db, weekday_hours, future_monday):
    make_closed_date(db, weekday_hours, future_monday)

    assert OperatingCalendar.is_open(db, weekday_hours.id, future_monday) is False
    assert OperatingCalendar.windows_for(db, weekday_hours.id, future_monday) is None
    # the following Monday is unaffected
    assert OperatingCalendar.is_open(db, weekday_hours.id, future_monday + timedelta(days=7))


def test_missing_weekday_is_closed_when_hours_configured(db, business, future_monday):
    make_hours(db, business, 1)  # only Tuesday configured

    assert OperatingCalendar.is_open(db, business.id, future_monday) is False
    assert OperatingCalendar.is_open(db, business.id, future_monday + timedelta(days=1))


def test_fallback_hours_when_nothing_configured(db, business, future_monday, caplog):
    with caplog.at_level("WARNING"):
        windows = OperatingCalendar.windows_for(db, business.id, future_monday)

    assert windows.is_fallback is True
    assert windows.open_time == time(9)
    assert windows.close_time == time(18)
    assert not windows.has_break
    assert OperatingCalendar.is_open(db, business.id, future_monday)
    assert "fallback hours" in caplog.text


def test_fallback_disabled_means_closed(db, business, future_monday, reset_settings):
    reset_settings.HOURS_FALLBACK_ENABLED = False

    assert OperatingCalendar.windows_for(db, business.id, future_monday) is None
    assert OperatingCalendar.is_open(db, business.id, future_monday) is False


def test_closed_date_beats_fallback(db, business, future_monday):
    make_closed_date(db, business, future_monday)
    assert OperatingCalendar.is_open(db, business.id, future_monday) is False


def test_calendars_are_tenant_scoped(db, weekday_hours, future_monday):
    other = make_business(db, slug="other-salon")
    make_closed_date(db, other, future_monday)

    assert OperatingCalendar.is_open(db, weekday_hours.id, future_monday)
    assert OperatingCalendar.is_open(db, other.id, future_monday) is False
