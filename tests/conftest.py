"""Pytest configuration and fixtures for the group booking tests."""
from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import build_workflow
from apps.api.main import create_app
from core.settings import ConfirmationDelivery, Settings
from core.utils_datetime import get_timezone
from db.session import create_catalog_engine, create_session_factory, init_catalog_db
from domain.models import BookingSubmission
from services.booking_validation import BookingValidator
from services.booking_workflow import BookingWorkflow
from services.confirmation_renderer import ConfirmationRenderer
from services.menu_catalog import InMemoryCatalog, SqlCatalog, load_catalog_data
from services.notification_dispatcher import NotificationDispatcher


LONDON = get_timezone("Europe/London")
VENUE_EMAIL = "restaurant@thescenicinn.com"


class RecordingTransport:
    """Mail transport that keeps every message instead of sending it."""

    def __init__(self):
        self.sent = []

    async def send(self, message):
        self.sent.append(message)


class FailingTransport:
    """Mail transport whose server always refuses the login."""

    def __init__(self, detail="535 5.7.8 Username and Password not accepted for smtp-user@example.com"):
        self.detail = detail
        self.attempts = 0

    async def send(self, message):
        self.attempts += 1
        raise ConnectionRefusedError(self.detail)


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        app_env="development",
        mail_backend="console",
        smtp_username="bookings@thescenicinn.com",
        venue_email=VENUE_EMAIL,
        database_url=f"sqlite:///{tmp_path / 'catalog.db'}",
    )


@pytest.fixture(scope="function")
def catalog_data(test_settings):
    """Parsed packaged catalog file."""
    return load_catalog_data(test_settings.catalog_file)


@pytest.fixture(scope="function")
def memory_catalog(catalog_data):
    return InMemoryCatalog(catalog_data)


@pytest.fixture(scope="function")
def sql_catalog(catalog_data):
    """Catalog backed by a seeded in-memory SQLite database."""
    engine = create_catalog_engine("sqlite:///:memory:")
    session_factory = create_session_factory(engine)
    init_catalog_db(engine, session_factory, catalog_data)
    yield SqlCatalog(session_factory)
    engine.dispose()


@pytest.fixture(scope="function")
def fixed_now():
    """Submission moment used by unit tests: 10 March 2026, noon in London."""
    return LONDON.localize(datetime(2026, 3, 10, 12, 0))


@pytest.fixture(scope="function")
def frozen_clock(fixed_now):
    """Pins the validator's current time to ``fixed_now``; reassign ``return_value`` to move it."""
    with patch("services.booking_validation.get_current_datetime", return_value=fixed_now) as mock_now:
        yield mock_now


@pytest.fixture(scope="function")
def booking_data():
    """Valid booking fields, two days after ``fixed_now``."""
    return {
        "date": "2026-03-12",
        "time": "18:00",
        "partySize": 4,
        "contactName": "Jane",
        "contactEmail": "jane@example.com",
        "specialRequests": "Window table if possible",
    }


@pytest.fixture(scope="function")
def menu_selections():
    return [
        {
            "name": "A",
            "selections": [
                {"course": "Starter", "item": "Soup", "price": 5},
                {"course": "Main", "item": "Roast Beef", "price": 25},
            ],
        },
        {
            "name": "B",
            "selections": [
                {"course": "Main", "item": "Salmon", "price": "28.50"},
                {"course": "Dessert", "item": "Apple Crumble", "price": 7},
            ],
        },
    ]


@pytest.fixture(scope="function")
def make_submission(booking_data, menu_selections):
    """Factory fixture building a submission; keyword arguments override booking fields."""
    def _make(selections=None, contact_email="jane@example.com", **booking_overrides):
        payload = {
            "bookingData": {**booking_data, **booking_overrides},
            "menuSelections": menu_selections if selections is None else selections,
        }
        if contact_email is not None:
            payload["contactEmail"] = contact_email
        return BookingSubmission.model_validate(payload)
    return _make


@pytest.fixture(scope="function")
def recording_transport():
    return RecordingTransport()


@pytest.fixture(scope="function")
def failing_transport():
    return FailingTransport()


@pytest.fixture(scope="function")
def make_workflow(test_settings):
    """Factory fixture wiring a workflow around a given transport."""
    def _make(transport, delivery=ConfirmationDelivery.INLINE):
        return BookingWorkflow(
            validator=BookingValidator(lead_time_hours=24, timezone=LONDON),
            renderer=ConfirmationRenderer(venue_name="The Scenic Inn", delivery=delivery),
            dispatcher=NotificationDispatcher(
                transport=transport,
                sender="bookings@thescenicinn.com",
                venue_name="The Scenic Inn",
                venue_email=VENUE_EMAIL,
            ),
        )
    return _make


@pytest.fixture(scope="function")
def make_client(test_settings, memory_catalog):
    """Factory fixture building a TestClient around a transport or a prepared workflow."""
    def _make(transport=None, workflow=None, catalog=None):
        if workflow is None:
            workflow = build_workflow(test_settings, transport=transport or RecordingTransport())
        app = create_app(config=test_settings, catalog=catalog or memory_catalog, workflow=workflow)
        return TestClient(app)
    return _make

