from datetime import date, datetime, time, timedelta
from types import SimpleNamespace

import pytest
import pytz

from salonbook.services.scheduling.slots import day_of_week, find_window, generate_slots

MONDAY = date(2026, 10, 19)


def window(day, start, end):
    return SimpleNamespace(day_of_week=day, start_time=start, end_time=end)


def service(minutes):
    return SimpleNamespace(duration_minutes=minutes)


def booking(start, end, status="confirmed"):
    return SimpleNamespace(start_time=start, end_time=end, status=status)


MONDAY_9_TO_5 = [window(1, time(9, 0), time(17, 0))]


def labels(slots):
    return [slot.time.strftime("%H:%M") for slot in slots]


class TestDayOfWeek:

    def test_sunday_is_zero(self):
        assert day_of_week(date(2026, 10, 18)) == 0
        assert day_of_week(MONDAY) == 1
        assert day_of_week(date(2026, 10, 24)) == 6

    def test_find_window_matches_weekday(self):
        windows = [window(0, time(10, 0), time(12, 0)), window(1, time(9, 0), time(17, 0))]
        assert find_window(windows, MONDAY) is windows[1]
        assert find_window(windows, date(2026, 10, 20)) is None


class TestGenerateSlots:

    def test_full_day_without_bookings(self):
        slots = generate_slots(MONDAY, service(60), MONDAY_9_TO_5, [])

        assert labels(slots)[0] == "09:00"
        assert labels(slots)[-1] == "16:00"
        assert "16:30" not in labels(slots)
        assert len(slots) == 15
        assert all(slot.available for slot in slots)
        assert slots[-1].end == datetime(2026, 10, 19, 17, 0)

    def test_existing_booking_blocks_overlapping_starts(self):
        existing = [booking(datetime(2026, 10, 19, 10, 0), datetime(2026, 10, 19, 11, 0))]
        slots = generate_slots(MONDAY, service(60), MONDAY_9_TO_5, existing)
        availability = {label: slot.available for label, slot in zip(labels(slots), slots)}

        assert availability["09:00"] is True
        assert availability["09:30"] is False
        assert availability["10:00"] is False
        assert availability["10:30"] is False
        assert availability["11:00"] is True

    def test_duration_off_grid_is_never_truncated(self):
        windows = [window(1, time(9, 0), time(10, 0))]
        slots = generate_slots(MONDAY, service(45), windows, [])

        assert labels(slots) == ["09:00"]
        assert slots[0].end == datetime(2026, 10, 19, 9, 45)

    def test_cancelled_booking_frees_the_slot(self):
        existing = [booking(
            datetime(2026, 10, 19, 10, 0), datetime(2026, 10, 19, 11, 0), status="cancelled"
        )]
        slots = generate_slots(MONDAY, service(60), MONDAY_9_TO_5, existing)

        assert all(slot.available for slot in slots)

    def test_closed_day_returns_empty_list(self):
        assert generate_slots(date(2026, 10, 18), service(60), MONDAY_9_TO_5, []) == []

    def test_no_service_selected_returns_empty_list(self):
        assert generate_slots(MONDAY, None, MONDAY_9_TO_5, []) == []

    def test_service_longer_than_window(self):
        windows = [window(1, time(9, 0), time(10, 0))]
        assert generate_slots(MONDAY, service(90), windows, []) == []

    def test_same_inputs_give_same_output(self):
        existing = [booking(datetime(2026, 10, 19, 13, 0), datetime(2026, 10, 19, 14, 30))]
        first = generate_slots(MONDAY, service(60), MONDAY_9_TO_5, existing)
        second = generate_slots(MONDAY, service(60), MONDAY_9_TO_5, existing)

        assert first == second

    def test_slots_are_strictly_ascending(self):
        slots = generate_slots(MONDAY, service(30), MONDAY_9_TO_5, [])
        starts = [slot.time for slot in slots]

        assert starts == sorted(starts)
        assert len(set(starts)) == len(starts)

    def test_custom_step(self):
        windows = [window(1, time(9, 0), time(10, 0))]
        slots = generate_slots(MONDAY, service(30), windows, [], step_minutes=15)

        assert labels(slots) == ["09:00", "09:15", "09:30"]

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            generate_slots(MONDAY, service(30), MONDAY_9_TO_5, [], step_minutes=0)

    def test_local_zone_is_applied(self):
        bratislava = pytz.timezone("Europe/Bratislava")
        # 10:00-11:00 local is 08:00-09:00 UTC while summer time is in effect
        existing = [booking(
            pytz.UTC.localize(datetime(2026, 10, 19, 8, 0)),
            pytz.UTC.localize(datetime(2026, 10, 19, 9, 0)),
        )]
        slots = generate_slots(MONDAY, service(60), MONDAY_9_TO_5, existing, tz=bratislava)
        by_label = {slot.to_dict()["local_time"]: slot for slot in slots}

        assert by_label["10:00"].available is False
        assert by_label["11:00"].available is True
        assert by_label["09:00"].time.utcoffset() == timedelta(hours=2)
