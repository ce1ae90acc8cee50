"""Composition of services from settings, and FastAPI dependencies."""

import logging
from typing import Optional

from fastapi import Request

from core.settings import CatalogBackend, MailBackend, Settings
from db.session import create_catalog_engine, create_session_factory, init_catalog_db
from services.booking_validation import BookingValidator
from services.booking_workflow import BookingWorkflow
from services.confirmation_renderer import ConfirmationRenderer
from services.menu_catalog import CatalogReader, InMemoryCatalog, SqlCatalog, load_catalog_data
from services.notification_dispatcher import (
    ConsoleTransport,
    MailTransport,
    NotificationDispatcher,
    SmtpTransport,
)


logger = logging.getLogger(__name__)


def build_catalog(config: Settings) -> CatalogReader:
    """Catalog reader for the configured backend."""
    catalog_data = load_catalog_data(config.catalog_file)

    if config.catalog_backend == CatalogBackend.DATABASE:
        engine = create_catalog_engine(config.database_url, echo=config.database_echo)
        session_factory = create_session_factory(engine)
        init_catalog_db(engine, session_factory, catalog_data)
        logger.info("Using database catalog")
        return SqlCatalog(session_factory)

    logger.info("Using in-memory catalog")
    return InMemoryCatalog(catalog_data)


def build_transport(config: Settings) -> MailTransport:
    """Mail transport for the configured backend."""
    if config.mail_backend == MailBackend.CONSOLE:
        return ConsoleTransport()

    return SmtpTransport(
        hostname=config.smtp_host,
        port=config.smtp_port,
        username=config.smtp_username,
        password=config.smtp_password,
        start_tls=config.smtp_start_tls,
        use_tls=config.smtp_use_tls,
        timeout=config.smtp_timeout_seconds,
    )


def build_workflow(config: Settings, transport: Optional[MailTransport] = None) -> BookingWorkflow:
    """Booking workflow wired from settings; pass a transport to override the configured one."""
    validator = BookingValidator(
        lead_time_hours=config.booking_lead_time_hours,
        timezone=config.venue_timezone,
    )
    renderer = ConfirmationRenderer(
        venue_name=config.venue_name,
        delivery=config.confirmation_delivery,
    )
    dispatcher = NotificationDispatcher(
        transport=transport or build_transport(config),
        sender=config.sender_address,
        venue_name=config.venue_name,
        venue_email=config.venue_email,
    )
    return BookingWorkflow(validator, renderer, dispatcher)


def get_catalog(request: Request) -> CatalogReader:
    return request.app.state.catalog


def get_workflow(request: Request) -> BookingWorkflow:
    return request.app.state.workflow
