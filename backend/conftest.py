"""
Pytest configuration file for backend testing.
"""
import sys
from datetime import date, datetime, time
from pathlib import Path

import pytest

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings
from core.database import Base, get_db
from modules.members.auth import create_access_token
from modules.members.models import Member, MemberRole
from modules.members.services import get_password_hash
from modules.reservations.models import (
    Reservation, ReservationTime, Theme, WaitingEntry
)

TEST_PASSWORD = "password"
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

# Slot of reservation 1; members 3 and 5 are queued for it in that order
SLOT_DATE = date(2040, 8, 1)
COUNT_OF_RESERVATION = 4


@pytest.fixture
def test_engine():
    """Fresh in-memory database per test so generated ids are predictable"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    """Create a database session for testing"""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def seed_scenario(session):
    """Members, catalog, four reservations and two waitings for reservation 1"""
    session.add_all([
        Member(id=1, name="어드민", email="admin@email.com", password_hash=_PASSWORD_HASH, role=MemberRole.ADMIN),
        Member(id=2, name="브라운", email="brown@email.com", password_hash=_PASSWORD_HASH, role=MemberRole.USER),
        Member(id=3, name="솔라", email="solar@email.com", password_hash=_PASSWORD_HASH, role=MemberRole.USER),
        Member(id=4, name="네오", email="neo@email.com", password_hash=_PASSWORD_HASH, role=MemberRole.USER),
        Member(id=5, name="포비", email="pobi@email.com", password_hash=_PASSWORD_HASH, role=MemberRole.USER),
    ])
    session.add_all([
        ReservationTime(id=1, start_at=time(10, 0)),
        ReservationTime(id=2, start_at=time(12, 0)),
        ReservationTime(id=3, start_at=time(14, 0)),
    ])
    session.add_all([
        Theme(id=1, name="레벨1 탈출", description="우리 모두 탈출해봐요!", thumbnail="https://example.com/1.jpg"),
        Theme(id=2, name="레벨2 탈출", description="조금 더 어려운 방", thumbnail="https://example.com/2.jpg"),
    ])
    session.flush()
    session.add_all([
        Reservation(id=1, member_id=2, date=SLOT_DATE, time_id=1, theme_id=1),
        Reservation(id=2, member_id=2, date=SLOT_DATE, time_id=2, theme_id=1),
        Reservation(id=3, member_id=4, date=date(2040, 8, 2), time_id=1, theme_id=2),
        Reservation(id=4, member_id=2, date=date(2040, 8, 3), time_id=3, theme_id=2),
    ])
    session.add_all([
        WaitingEntry(id=1, member_id=3, date=SLOT_DATE, time_id=1, theme_id=1,
                     created_at=datetime(2024, 1, 1, 10, 0, 0)),
        WaitingEntry(id=2, member_id=5, date=SLOT_DATE, time_id=1, theme_id=1,
                     created_at=datetime(2024, 1, 1, 10, 0, 1)),
    ])
    session.commit()


@pytest.fixture
def seeded_db(db_session):
    seed_scenario(db_session)
    return db_session


@pytest.fixture
def client(seeded_db):
    """Test client whose requests share the seeded session"""
    from app.main import app

    def _override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def login_as(client, seeded_db):
    """Put a session cookie for the given member on the test client"""

    def _login_as(member_id: int) -> TestClient:
        member = seeded_db.get(Member, member_id)
        client.cookies.set(settings.auth_cookie_name, create_access_token(member))
        return client

    return _login_as


@pytest.fixture
def file_session_factory(tmp_path):
    """Seeded file-backed database that several threads can open sessions on"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'roomescape.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = factory()
    try:
        seed_scenario(session)
    finally:
        session.close()

    yield factory
    engine.dispose()
