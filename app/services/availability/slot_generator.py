# app/services/availability/slot_generator.py
"""
Slot generation for a single day.

Candidate slots start at the opening time and advance on a fixed grid. Each
candidate spans the service duration; the first candidate that would end
after closing time stops the sequence. Candidates are flagged unavailable
when they start inside the break, overlap an active booking, or do not
start strictly after ``now``.

The result depends on ``now``, so it has to be regenerated per request.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Optional

from app.models.booking import BookingStatus
from app.services.calendar.operating_calendar import DayWindows


@dataclass(frozen=True)
class Slot:
    start_time: datetime
    end_time: datetime
    available: bool


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """[a_start, a_end) and [b_start, b_end) intersect"""
    return a_start < b_end and b_start < a_end


def generate_slots(
        target_date: date,
        windows: Optional[DayWindows],
        bookings: Iterable,
        duration_minutes: int,
        now: datetime,
        interval_minutes: int = 30
) -> Iterator[Slot]:
    """
    Lazily yield the slots of ``target_date`` in start order.

    ``windows`` is None when the business is closed, which yields nothing.
    ``bookings`` may contain cancelled entries; they are ignored.
    """
    if windows is None:
        return
    if duration_minutes <= 0 or interval_minutes <= 0:
        raise ValueError("duration and interval must be positive")

    active = [b for b in bookings if b.status != BookingStatus.CANCELLED]
    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=interval_minutes)

    current = datetime.combine(target_date, windows.open_time)
    close = datetime.combine(target_date, windows.close_time)

    while current < close:
        slot_end = current + duration
        if slot_end > close:
            break

        available = (
            current > now
            and not windows.in_break(current.time())
            and not any(intervals_overlap(current, slot_end, b.start_time, b.end_time) for b in active)
        )
        yield Slot(start_time=current, end_time=slot_end, available=available)

        current += step
