"""Shared pytest fixtures.

Async tests run under pytest-asyncio in auto mode (see pyproject.toml), so
``async def`` tests need no marker. Upstream HTTP is faked with pytest-httpx.
"""

from datetime import UTC, datetime, timedelta

import pytest

from tests.helpers import FakeCredentialLookup, ManualClock, RecordingSleep, make_credential


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def lookup() -> FakeCredentialLookup:
    """Credential store holding a valid Mural credential for 'acme'."""
    return FakeCredentialLookup(make_credential("acme"))


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def future() -> datetime:
    return datetime.now(UTC) + timedelta(days=30)


@pytest.fixture
def past() -> datetime:
    return datetime.now(UTC) - timedelta(days=1)
