"""
Overlap Detection

Decides whether a candidate interval collides with existing bookings.
Intervals are half-open, [start, end), so back-to-back bookings are allowed.
Cancelled bookings never occupy the calendar.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Any

from salonbook.models.booking import BookingStatus


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def intervals_overlap(
        start_a: datetime,
        end_a: datetime,
        start_b: datetime,
        end_b: datetime
) -> bool:
    """[start_a, end_a) and [start_b, end_b) overlap iff start_a < end_b and start_b < end_a"""
    return as_utc(start_a) < as_utc(end_b) and as_utc(start_b) < as_utc(end_a)


def is_blocking(booking: Any) -> bool:
    """True when the booking occupies the calendar (anything but cancelled)"""
    status = getattr(booking, "status", None)
    if isinstance(status, BookingStatus):
        status = status.value
    return status != BookingStatus.CANCELLED.value


def find_conflicts(
        candidate_start: datetime,
        candidate_end: datetime,
        existing_bookings: Iterable[Any]
) -> List[Any]:
    """
    Return the non-cancelled bookings that overlap the candidate interval.

    Args:
        candidate_start: start of the interval being checked
        candidate_end: end of the interval being checked (exclusive)
        existing_bookings: objects with start_time, end_time and status

    Returns:
        list: overlapping bookings in input order
    """
    return [
        booking for booking in existing_bookings
        if is_blocking(booking) and intervals_overlap(
            candidate_start, candidate_end, booking.start_time, booking.end_time
        )
    ]


def overlaps(
        candidate_start: datetime,
        candidate_end: datetime,
        existing_bookings: Iterable[Any]
) -> bool:
    """
    True if the candidate interval cannot be booked.

    An empty or inverted candidate (end <= start) is always reported as
    conflicting so that a malformed request is never accepted.
    """
    if as_utc(candidate_end) <= as_utc(candidate_start):
        return True

    return bool(find_conflicts(candidate_start, candidate_end, existing_bookings))
