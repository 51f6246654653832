import os

# Must be set before EventHub.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api import app
from EventHub.completion import get_completion_client
from EventHub.database import (
    Base, get_db, init_db, User, Vendor, VendorService, Event,
    ServiceTypeEnum, PriceUnitEnum, EventTypeEnum,
)
from EventHub.token_utils import create_access_token
from EventHub.utils_time import get_utc_time


class FakeCompletionClient:
    """Stands in for CompletionClient: records every call and returns scripted replies."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def complete(self, system_prompt, prompt, json_format=False, operation="completion"):
        self.calls.append({
            "system_prompt": system_prompt,
            "prompt": prompt,
            "json_format": json_format,
            "operation": operation,
        })
        if not self.replies:
            raise AssertionError(f"No scripted reply left for {operation}")
        return self.replies.pop(0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_completion():
    return FakeCompletionClient()


@pytest.fixture
def client(db, fake_completion):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_client] = lambda: fake_completion
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


# --- factories -----------------------------------------------------------------

def make_user(db, name="Test User", email=None, role="user", phone_number="+15550001111"):
    user = User(name=name, email=email or f"{name.lower().replace(' ', '.')}@example.com",
                phone_number=phone_number, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_vendor(db, owner, service_type=ServiceTypeEnum.catering, rating=0.0, verified=True,
                name="Test Vendor", services=None):
    vendor = Vendor(
        user_id=owner.user_id,
        business_name=name,
        business_description=f"{name} description",
        service_type=service_type,
        contact_email=owner.email,
        contact_phone=owner.phone_number,
        average_rating=rating,
        is_verified=verified,
        services=[
            VendorService(name=s_name, price=price, price_unit=PriceUnitEnum.flat)
            for s_name, price in (services or [])
        ],
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


def make_event(db, owner, title="Summer Gala", event_type=EventTypeEnum.wedding):
    event = Event(
        user_id=owner.user_id,
        title=title,
        description="An evening celebration",
        date=get_utc_time(),
        time="18:00",
        location="Austin, TX",
        event_type=event_type,
        expected_attendees=120,
        budget=15000,
        services=["venue", "catering"],
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def auth_headers(user):
    token = create_access_token({"user_id": user.user_id, "role": user.role, "email": user.email})
    return {"Authorization": f"Bearer {token['token']}"}


def as_principal(user):
    """The dict shape get_current_user hands to services."""
    return {"user_id": user.user_id, "role": user.role, "email": user.email}


@pytest.fixture
def user(db):
    return make_user(db, name="Alice Planner")


@pytest.fixture
def other_user(db):
    return make_user(db, name="Bob Guest")


@pytest.fixture
def admin(db):
    return make_user(db, name="Ada Admin", role="admin")
