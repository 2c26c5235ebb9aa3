"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("ANALYTICS_REGION", "Mumbai")

from realty_office.services.office_service import RealtyOffice
from realty_office.utils.logging_config import LoggingConfig, OfficeConfig
from tests.utils.helpers import AGENT_ALICE, AGENT_BOB, make_property_draft, staff_office


@pytest.fixture
def office():
    """Empty office with no registered callers."""
    return RealtyOffice()


@pytest.fixture
def staffed_office(office):
    """Office with an administrator and one agent of each role."""
    return staff_office(office)


@pytest.fixture
def listed_office(staffed_office):
    """Staffed office with two listings by Alice and one by Bob."""
    staffed_office.add_property(AGENT_ALICE, make_property_draft(title="Alice 1"))
    staffed_office.add_property(
        AGENT_ALICE,
        make_property_draft(title="Alice 2", price=25_000_000, configuration="bhk3"),
    )
    staffed_office.add_property(
        AGENT_BOB,
        make_property_draft(title="Bob 1", price=45_000, category="rental", furnishing="furnished"),
    )
    return staffed_office


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time


@pytest.fixture
def mask_sensitive(monkeypatch):
    monkeypatch.setattr(LoggingConfig, "LOG_MASK_SENSITIVE", True)
    monkeypatch.setattr(LoggingConfig, "LOG_FREE_TEXT", True)


@pytest.fixture
def analytics_region(monkeypatch):
    monkeypatch.setattr(OfficeConfig, "ANALYTICS_REGION", "Mumbai")
    monkeypatch.setattr(OfficeConfig, "ANALYTICS_REGION_TYPE", "city")
