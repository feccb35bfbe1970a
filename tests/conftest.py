"""Shared fixtures: in-memory database, seeded business, API client and tokens"""
import uuid
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salonbook.config.database import get_db
from salonbook.config.settings import get_settings
from salonbook.main import create_app
from salonbook.models import AvailabilityWindow, Base, Profile, Service


def failing_query(db, *failing_entities):
    """db.query that raises OperationalError for the given entities only"""
    real_query = db.query

    def query(*entities):
        if any(entity is failing for entity in entities for failing in failing_entities):
            raise OperationalError("SELECT", {}, Exception("statement timeout"))
        return real_query(*entities)

    return patch.object(db, "query", side_effect=query)


def next_weekday(weekday: int, min_days_ahead: int = 7) -> date:
    """Next date (at least min_days_ahead from today) with date.weekday() == weekday"""
    day = date.today() + timedelta(days=min_days_ahead)
    while day.weekday() != weekday:
        day += timedelta(days=1)
    return day


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def profile(db):
    profile = Profile(
        id=uuid.uuid4(),
        slug="studio-anna",
        name="Studio Anna",
        email="anna@example.com",
        phone="+421900111222",
        timezone="Europe/Bratislava",
        is_active=True,
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def haircut(db, profile):
    service = Service(
        profile_id=profile.id,
        name="Haircut",
        duration_minutes=60,
        price=Decimal("25.00"),
        is_active=True,
    )
    db.add(service)
    db.commit()
    return service


@pytest.fixture
def workweek(db, profile):
    """Monday to Friday, 09:00-17:00"""
    windows = [
        AvailabilityWindow(
            profile_id=profile.id,
            day_of_week=day,
            start_time=time(9, 0),
            end_time=time(17, 0),
        )
        for day in range(1, 6)
    ]
    db.add_all(windows)
    db.commit()
    return windows


@pytest.fixture
def client(db):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(subject, email="owner@example.com", **overrides):
    settings = get_settings()
    claims = {
        "sub": str(subject),
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    claims.update(overrides)
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def auth_headers(profile):
    return {"Authorization": f"Bearer {make_token(profile.id, email=profile.email)}"}
