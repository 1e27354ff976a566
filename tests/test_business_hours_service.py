from datetime import time, timedelta
from uuid import uuid4

import pytest

from app.core.exceptions import InvalidConfiguration, ResourceNotFound
from app.models.business import BusinessHours
from app.services.calendar.business_hours_service import BusinessHoursService
from conftest import make_hours


def test_update_creates_then_replaces(db, business):
    BusinessHoursService.update_business_hours(db, business.id, 0, True, time(9), time(17))
    hours = BusinessHoursService.update_business_hours(
        db, business.id, 0, True, time(10), time(18), time(13), time(14)
    )

    assert hours.open_time == time(10)
    assert hours.break_start_time == time(13)
    assert db.query(BusinessHours).filter_by(business_id=business.id).count() == 1


def test_closed_day_clears_times(db, business):
    hours = BusinessHoursService.update_business_hours(db, business.id, 6, False, time(9), time(17))

    assert hours.is_open is False
    assert hours.open_time is None
    assert hours.close_time is None


@pytest.mark.parametrize("open_time,close_time,break_start,break_end", [
    (None, time(17), None, None),
    (time(9), None, None, None),
    (time(17), time(9), None, None),
    (time(9), time(9), None, None),
    (time(9), time(17), time(12), None),
    (time(9), time(17), None, time(13)),
    (time(9), time(17), time(13), time(12)),
    (time(9), time(17), time(8), time(10)),
    (time(9), time(17), time(16), time(18)),
])
def test_invalid_open_day_rejected(db, business, open_time, close_time, break_start, break_end):
    with pytest.raises(InvalidConfiguration):
        BusinessHoursService.update_business_hours(
            db, business.id, 2, True, open_time, close_time, break_start, break_end
        )
    assert BusinessHoursService.get_business_hours(db, business.id) == []


def test_invalid_update_keeps_previous_record(db, business):
    BusinessHoursService.update_business_hours(db, business.id, 0, True, time(9), time(17))

    with pytest.raises(InvalidConfiguration):
        BusinessHoursService.update_business_hours(db, business.id, 0, True, time(18), time(9))

    stored = BusinessHoursService.get_business_hours(db, business.id)[0]
    assert stored.open_time == time(9)
    assert stored.close_time == time(17)


def test_write_time_hook_rejects_direct_inserts(db, business):
    with pytest.raises(InvalidConfiguration):
        make_hours(db, business, 3, open_time=time(12), close_time=time(11))
    db.rollback()


def test_invalid_weekday(db, business):
    with pytest.raises(InvalidConfiguration):
        BusinessHoursService.update_business_hours(db, business.id, 7, True, time(9), time(17))


def test_unknown_business(db):
    with pytest.raises(ResourceNotFound):
        BusinessHoursService.update_business_hours(db, uuid4(), 0, True, time(9), time(17))


def test_initialize_default_hours(db, business):
    hours = BusinessHoursService.initialize_default_hours(db, business.id)

    assert [h.is_open for h in hours] == [True] * 5 + [False] * 2
    assert hours[0].open_time == time(9)
    assert hours[0].close_time == time(18)

    # idempotent
    assert len(BusinessHoursService.initialize_default_hours(db, business.id)) == 7


def test_closed_dates_lifecycle(db, business, future_monday):
    record = BusinessHoursService.add_closed_date(db, business.id, future_monday, "Holiday")
    BusinessHoursService.add_closed_date(db, business.id, future_monday + timedelta(days=1))
    again = BusinessHoursService.add_closed_date(db, business.id, future_monday, "Vacation")

    assert again.id == record.id
    assert again.reason == "Vacation"
    assert len(BusinessHoursService.get_closed_dates(db, business.id)) == 2
    assert len(BusinessHoursService.get_closed_dates(db, business.id, from_date=future_monday + timedelta(days=1))) == 1

    BusinessHoursService.delete_closed_date(db, business.id, record.id)
    assert len(BusinessHoursService.get_closed_dates(db, business.id)) == 1

    with pytest.raises(ResourceNotFound):
        BusinessHoursService.delete_closed_date(db, business.id, record.id)
