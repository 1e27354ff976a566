import os

# Point the app at SQLite before any app module builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BOOKING_LOCK_BACKEND"] = "local"

from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.config.database import build_engine, create_tables, get_db
from app.config.settings import get_settings
from app.main import app
from app.models import Business, BusinessHours, ClosedDate, Service


def next_weekday(weekday: int, weeks_ahead: int = 2) -> date:
    """A date with the given weekday (0=Monday) safely in the future"""
    today = date.today()
    return today + timedelta(days=(weekday - today.weekday()) % 7 + 7 * weeks_ahead)


@pytest.fixture
def future_monday() -> date:
    return next_weekday(0)


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "ENFORCE_OPERATING_HOURS", False)
    monkeypatch.setattr(settings, "HOURS_FALLBACK_ENABLED", True)
    monkeypatch.setattr(settings, "SLOT_INTERVAL_MINUTES", 30)
    monkeypatch.setattr(settings, "BOOKING_LOCK_BACKEND", "local")
    yield settings


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'booking.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_business(db, slug="studio-nord", is_active=True, timezone="UTC") -> Business:
    business = Business(name=slug.replace("-", " ").title(), slug=slug, is_active=is_active, timezone=timezone)
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


def make_service(db, business, duration=30, price="250.00", is_active=True, name="Haircut") -> Service:
    service = Service(
        business_id=business.id,
        name=name,
        duration=duration,
        price=Decimal(price),
        is_active=is_active,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def make_hours(db, business, day_of_week, open_time=time(9), close_time=time(18),
               break_start=None, break_end=None, is_open=True) -> BusinessHours:
    hours = BusinessHours(
        business_id=business.id,
        day_of_week=day_of_week,
        is_open=is_open,
        open_time=open_time,
        close_time=close_time,
        break_start_time=break_start,
        break_end_time=break_end,
    )
    db.add(hours)
    db.commit()
    db.refresh(hours)
    return hours


def make_closed_date(db, business, closed_date, reason="Holiday") -> ClosedDate:
    record = ClosedDate(business_id=business.id, closed_date=closed_date, reason=reason)
    db.add(record)
    db.commit()
    return record


@pytest.fixture
def business(db):
    return make_business(db)


@pytest.fixture
def service(db, business):
    return make_service(db, business, duration=30)


@pytest.fixture
def weekday_hours(db, business):
    """Monday-Friday 09:00-18:00 with a 12:00-13:00 break, weekends closed"""
    for day in range(7):
        if day < 5:
            make_hours(db, business, day, break_start=time(12), break_end=time(13))
        else:
            make_hours(db, business, day, open_time=None, close_time=None, is_open=False)
    return business


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute))
