"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest
from rest_framework.test import APIClient

from tests.factories import make_project, one_time_doc
from tests.fakes import (
    InMemoryCertificateIssuer,
    InMemoryProjectStore,
    InMemorySignupStore,
)
from volunteering.domain.clock import FixedClock


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def one_time_project():
    """Scenario project: 2025-06-01, 09:00-12:00."""
    return make_project(schedule=one_time_doc("2025-06-01", "09:00", "12:00"))


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 6, 1, 8, 5))


@pytest.fixture
def project_store(one_time_project) -> InMemoryProjectStore:
    return InMemoryProjectStore(one_time_project)


@pytest.fixture
def signup_store() -> InMemorySignupStore:
    return InMemorySignupStore()


@pytest.fixture
def certificate_issuer() -> InMemoryCertificateIssuer:
    return InMemoryCertificateIssuer()
