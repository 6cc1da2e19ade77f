"""
Core — Model Tests

Tests for AuditLog and the audit snapshot helpers.

@file core/tests/test_models.py
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth.models import AnonymousUser

from core.models import AuditLog
from core.services import AuditService
from tests.factories import AuditLogFactory, ProductFactory, UserFactory

@pytest.mark.django_db
class TestAuditLog:
    def test_create_audit_log(self):
        user = UserFactory()
        log = AuditService.log(
            actor=user,
            action=AuditLog.ActionChoices.CREATE,
            model_name='Product',
            object_id='test-123',
            new_values={'key': 'value'},
        )
        assert log.pk is not None
        assert log.action == 'CREATE'
        assert log.actor == user
        assert log.new_values == {'key': 'value'}

    def test_anonymous_actor_stored_as_null(self):
        log = AuditService.log(
            actor=AnonymousUser(),
            action=AuditLog.ActionChoices.UPDATE,
            model_name='Product',
            object_id=uuid.uuid4(),
        )
        assert log.actor is None
        assert isinstance(log.object_id, str)

    def test_factory(self):
        log = AuditLogFactory()
        assert log.pk is not None
        assert log.actor is not None

@pytest.mark.django_db
class TestSnapshot:
    def test_snapshot_selected_fields(self):
        product = ProductFactory(brand_name='Panadol', unit_price=Decimal('2.50'))
        snapshot = AuditService.snapshot(product, fields=['brand_name', 'unit_price'])
        assert snapshot == {'brand_name': 'Panadol', 'unit_price': '2.50'}

class TestJsonable:
    def test_scalars(self):
        value = uuid.uuid4()
        assert AuditService.jsonable(value) == str(value)
        assert AuditService.jsonable(Decimal('1.10')) == '1.10'
        assert AuditService.jsonable(date(2026, 1, 31)) == '2026-01-31'
        assert AuditService.jsonable(None) is None
        assert AuditService.jsonable(7) == 7

    def test_nested(self):
        data = {'lines': [(Decimal('1'), date(2026, 2, 1))]}
        assert AuditService.jsonable(data) == {'lines': [['1', '2026-02-01']]}
