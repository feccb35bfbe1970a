import threading
import time
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from salonbook.config.database import build_engine
from salonbook.core.exceptions import NotFound, SlotTaken, StoreUnavailable
from salonbook.models import Base, Booking, Profile, Service
from salonbook.services.store import schedule_store
from salonbook.services.store.schedule_store import ScheduleStore

CLIENT = {"name": "Jana", "phone": "+421900000001", "email": None, "notes": None}


def utc(hour, minute=0, day=19):
    return datetime(2026, 10, day, hour, minute, tzinfo=timezone.utc)


class TestReads:

    def test_profile_lookups(self, db, profile):
        store = ScheduleStore(db)
        assert store.get_profile(profile.id).slug == "studio-anna"
        assert store.get_profile_by_slug("studio-anna").id == profile.id
        assert store.get_profile_by_slug("missing") is None

    def test_service_is_scoped_to_profile(self, db, profile, haircut):
        store = ScheduleStore(db)
        assert store.get_service(profile.id, haircut.id).name == "Haircut"
        assert store.get_service(uuid.uuid4(), haircut.id) is None

    def test_availability_ordered_by_day(self, db, profile, workweek):
        days = [w.day_of_week for w in ScheduleStore(db).get_availability(profile.id)]
        assert days == [1, 2, 3, 4, 5]

    def test_get_bookings_intersecting_range(self, db, profile, haircut):
        store = ScheduleStore(db)
        early = store.insert_booking(profile.id, haircut.id, CLIENT, utc(7), utc(8))
        inside = store.insert_booking(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        late = store.insert_booking(profile.id, haircut.id, CLIENT, utc(22), utc(23, 30))
        cancelled = store.insert_booking(profile.id, haircut.id, CLIENT, utc(12), utc(13))
        store.update_booking_status(cancelled.id, "cancelled")

        found = store.get_bookings(profile.id, utc(8), utc(23))

        assert [b.id for b in found] == [inside.id, late.id]
        assert early.id not in [b.id for b in found]

    def test_get_bookings_can_include_cancelled(self, db, profile, haircut):
        store = ScheduleStore(db)
        booking = store.insert_booking(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        store.update_booking_status(booking.id, "cancelled")

        assert store.get_bookings(profile.id, utc(0), utc(23)) == []
        assert len(store.get_bookings(profile.id, utc(0), utc(23), exclude_status=None)) == 1

    def test_times_come_back_as_utc(self, db, profile, haircut):
        store = ScheduleStore(db)
        store.insert_booking(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        db.expire_all()

        booking = store.get_bookings(profile.id, utc(0), utc(23))[0]
        assert booking.start_time == utc(10)
        assert booking.start_time.tzinfo is not None

    def test_list_bookings_newest_first(self, db, profile, haircut):
        store = ScheduleStore(db)
        store.insert_booking(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        store.insert_booking(profile.id, haircut.id, CLIENT, utc(10, day=20), utc(11, day=20))

        starts = [b.start_time for b in store.list_bookings(profile.id)]
        assert starts == [utc(10, day=20), utc(10)]


class TestInsertBookingIfFree:

    def test_inserts_pending_booking(self, db, profile, haircut):
        booking = ScheduleStore(db).insert_booking_if_free(
            profile.id, haircut.id, CLIENT, utc(10), utc(11)
        )
        assert booking.status == "pending"
        assert booking.client_name == "Jana"

    def test_rejects_overlap_without_inserting(self, db, profile, haircut):
        store = ScheduleStore(db)
        store.insert_booking_if_free(profile.id, haircut.id, CLIENT, utc(10), utc(11))

        with pytest.raises(SlotTaken):
            store.insert_booking_if_free(profile.id, haircut.id, CLIENT, utc(10, 30), utc(11, 30))

        assert db.query(Booking).count() == 1

    def test_back_to_back_is_allowed(self, db, profile, haircut):
        store = ScheduleStore(db)
        store.insert_booking_if_free(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        store.insert_booking_if_free(profile.id, haircut.id, CLIENT, utc(11), utc(12))

        assert db.query(Booking).count() == 2

    def test_cancelled_booking_does_not_block(self, db, profile, haircut):
        store = ScheduleStore(db)
        first = store.insert_booking_if_free(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        store.update_booking_status(first.id, "cancelled")

        store.insert_booking_if_free(profile.id, haircut.id, CLIENT, utc(10), utc(11))
        assert db.query(Booking).count() == 2

    def test_unknown_profile(self, db, haircut):
        with pytest.raises(NotFound):
            ScheduleStore(db).insert_booking_if_free(
                uuid.uuid4(), haircut.id, CLIENT, utc(10), utc(11)
            )


class TestFailures:

    def test_database_error_becomes_store_unavailable(self, db, profile):
        store = ScheduleStore(db)
        with patch.object(db, "query", side_effect=OperationalError("SELECT", {}, Exception("timeout"))):
            with pytest.raises(StoreUnavailable):
                store.get_availability(profile.id)

    def test_update_missing_booking(self, db):
        with pytest.raises(NotFound):
            ScheduleStore(db).update_booking_status(uuid.uuid4(), "confirmed")

    def test_failed_insert_reports_unavailable(self, db, profile, haircut):
        store = ScheduleStore(db)
        with patch.object(db, "commit", side_effect=OperationalError("INSERT", {}, Exception("gone"))):
            with pytest.raises(StoreUnavailable):
                store.insert_booking_if_free(
                    profile.id, haircut.id, CLIENT, utc(10), utc(11)
                )


class TestConcurrentSubmissions:
    """Two sessions on a file database race for the same interval"""

    @pytest.fixture
    def file_db(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'race.db'}")
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        with Session() as seed:
            profile = Profile(
                id=uuid.uuid4(),
                slug="studio-race",
                name="Studio Race",
                email="race@example.com",
                timezone="Europe/Bratislava",
                is_active=True,
            )
            seed.add(profile)
            seed.flush()
            service = Service(
                profile_id=profile.id,
                name="Haircut",
                duration_minutes=60,
                price=Decimal("25.00"),
                is_active=True,
            )
            seed.add(service)
            seed.commit()
            ids = (profile.id, service.id)

        yield Session, ids
        engine.dispose()

    def test_only_one_submission_wins(self, file_db, monkeypatch):
        Session, (profile_id, service_id) = file_db

        # Hold each submission between its overlap check and its insert
        real_find_conflicts = schedule_store.find_conflicts

        def slow_find_conflicts(*args):
            time.sleep(0.3)
            return real_find_conflicts(*args)

        monkeypatch.setattr(schedule_store, "find_conflicts", slow_find_conflicts)

        barrier = threading.Barrier(2)
        results = []

        def submit():
            session = Session()
            try:
                barrier.wait()
                ScheduleStore(session).insert_booking_if_free(
                    profile_id, service_id, CLIENT, utc(10), utc(11)
                )
                results.append("booked")
            except SlotTaken:
                results.append("taken")
            finally:
                session.close()

        threads = [threading.Thread(target=submit) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert sorted(results) == ["booked", "taken"]
        with Session() as check:
            assert check.query(Booking).count() == 1
