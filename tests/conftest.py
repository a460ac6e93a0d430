"""Shared fixtures: a fixed clock and fresh, empty domain state."""

from datetime import date

import pytest

from wallet.audit import AuditLogger
from wallet.config import AnalyticsSettings, AppSettings
from wallet.services.storage import InMemoryAuditStorage
from wallet.state import DomainState


TODAY = date(2026, 3, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def state():
    return DomainState()


@pytest.fixture
def app_settings():
    return AppSettings(_env_file=None)


@pytest.fixture
def analytics_settings():
    return AnalyticsSettings()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)
