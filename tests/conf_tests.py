import os
import pytest
from datetime import date, datetime, time
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from coworking.main import app
from coworking.db import Base, get_db, init_database
from coworking.models.resource import Resource
from coworking.models.user import User
from coworking.services.booking_service import BookingService
from coworking.store import SqlAlchemyBookingStore
from coworking.utils.locks import ResourceLocks

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
init_database(engine)

# A weekday far enough ahead to never collide with real data
TEST_DAY = date(2030, 1, 15)


def at(hour, minute=0, day=TEST_DAY):
    """Helper building a datetime on the test day"""
    return datetime.combine(day, time(hour, minute))


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

client = TestClient(app)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables after each test"""
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_next_user():
    """Helper function to generate unique usernames"""
    if not hasattr(get_next_user, "user_count"):
        get_next_user.user_count = 0
    get_next_user.user_count += 1
    return get_next_user.user_count


def add_resource(db, name, capacity, kind):
    """Helper inserting a resource row directly"""
    resource = Resource(name=name, capacity=capacity, kind=kind)
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


@pytest.fixture
def test_user(test_db):
    """Fixture to create a test user in the database"""
    username = get_next_user()
    db_user = User(username=f"user_{username}", email=f"user_{username}@example.com")
    test_db.add(db_user)
    test_db.commit()
    test_db.refresh(db_user)
    return db_user


@pytest.fixture
def test_workspace(test_db):
    return add_resource(test_db, "Desk 12", 1, "workspace")


@pytest.fixture
def test_room(test_db):
    return add_resource(test_db, "Conference Room A", 10, "conference_room")


@pytest.fixture
def booking_service(test_db):
    """Booking service over the test database with its own lock registry"""
    return BookingService(SqlAlchemyBookingStore(test_db), locks=ResourceLocks())
