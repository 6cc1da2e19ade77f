"""
PharmaLedger — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from django.db.models import QuerySet
from rest_framework.test import APIClient

from tests.factories import SuperuserFactory, UserFactory

@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()

@pytest.fixture
def user(db):
    """Active user with default password TestPass2026!"""
    return UserFactory()

@pytest.fixture
def admin_user(db):
    """Superuser with default password TestPass2026!"""
    return SuperuserFactory()

@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client

@pytest.fixture
def row_locks(monkeypatch):
    """Models queried with select_for_update() during the test, in call order."""
    locked = []
    select_for_update = QuerySet.select_for_update

    def recording_select_for_update(queryset, *args, **kwargs):
        locked.append(queryset.model)
        return select_for_update(queryset, *args, **kwargs)

    monkeypatch.setattr(QuerySet, 'select_for_update', recording_select_for_update)
    return locked
