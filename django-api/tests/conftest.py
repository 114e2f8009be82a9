"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from fakes import TODAY, InMemoryMembershipStore
from membership.domain import PricingConfig


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
def store() -> InMemoryMembershipStore:
    return InMemoryMembershipStore(config=PricingConfig())


@pytest.fixture
def clock():
    return lambda: TODAY
