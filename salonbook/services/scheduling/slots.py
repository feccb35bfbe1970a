"""
Slot Generation

Turns the weekly working hours of a business plus the bookings of one day
into the list of start times a client can pick from.

The grid step and the service duration are independent: candidates start
every ``step_minutes`` from the opening time and each one occupies
``[start, start + duration)``. A candidate that would run past closing time
is dropped, never shortened.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Optional, Any

from salonbook.services.scheduling.overlap import overlaps

DEFAULT_STEP_MINUTES = 30


@dataclass(frozen=True)
class Slot:
    """A bookable start time; derived on every request, never stored"""
    time: datetime
    end: datetime
    available: bool

    def to_dict(self):
        return {
            "time": self.time.isoformat(),
            "end": self.end.isoformat(),
            "local_time": self.time.strftime("%H:%M"),
            "available": self.available,
        }


def day_of_week(target_date: date) -> int:
    """Weekday number with 0=Sunday ... 6=Saturday"""
    return (target_date.weekday() + 1) % 7


def find_window(windows: Iterable[Any], target_date: date) -> Optional[Any]:
    """Pick the working-hours window for the weekday of target_date"""
    weekday = day_of_week(target_date)
    return next((w for w in windows if w.day_of_week == weekday), None)


def localize(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    """Attach a zone to a wall-clock datetime (pytz zones need localize())"""
    if tz is None:
        return naive
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def generate_slots(
        target_date: date,
        service: Optional[Any],
        availability_windows: Iterable[Any],
        bookings_on_date: Iterable[Any],
        tz: Optional[tzinfo] = None,
        step_minutes: int = DEFAULT_STEP_MINUTES
) -> List[Slot]:
    """
    Generate discrete slots for one day.

    Args:
        target_date: calendar day in the business's local time
        service: object with duration_minutes, or None when nothing is selected
        availability_windows: objects with day_of_week, start_time, end_time
        bookings_on_date: bookings intersecting the day (cancelled ones are ignored)
        tz: the business's time zone; None keeps naive wall-clock datetimes
        step_minutes: distance between consecutive candidate start times

    Returns:
        list[Slot]: strictly ascending by start time; empty when the day is
        closed or no service is selected

    Algorithm:
        1. Find the window for the weekday of target_date
        2. Walk from opening time in steps of step_minutes
        3. Keep a candidate only if start + duration <= closing time
        4. Mark it available unless it overlaps a non-cancelled booking
    """
    if service is None:
        return []

    window = find_window(availability_windows, target_date)
    if window is None:
        return []

    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")

    duration = timedelta(minutes=service.duration_minutes)
    step = timedelta(minutes=step_minutes)
    bookings = list(bookings_on_date)

    # Walk in wall-clock time so every slot is aligned to the opening hour
    window_start = datetime.combine(target_date, window.start_time)
    window_end = datetime.combine(target_date, window.end_time)

    slots = []
    current = window_start

    while current < window_end:
        current_end = current + duration

        if current_end <= window_end:
            slot_start = localize(current, tz)
            slot_end = localize(current_end, tz)
            slots.append(Slot(
                time=slot_start,
                end=slot_end,
                available=not overlaps(slot_start, slot_end, bookings)
            ))

        current += step

    return slots
