"""
Tests — SaleLedger reads and failure translation.

@file sales/tests/test_repositories.py
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import OperationalError
from django.utils import timezone

from core.exceptions import ServiceUnavailableError
from sales.models import Sale
from sales.repositories import SaleLedger
from tests.factories import ProductFactory, SaleFactory

pytestmark = pytest.mark.django_db


class TestSaleLedger:

    def test_append_copies_product(self, user):
        product = ProductFactory(unit_price=Decimal('1.20'))
        sale = SaleLedger().append(product=product, quantity=5, batch_number='LOT-1', actor=user)
        assert sale.total_amount == Decimal('6.00')
        assert sale.product_id == product.pk
        assert sale.created_by == user

    def test_total_amount(self):
        SaleFactory(quantity=2, unit_price=Decimal('3.00'))
        SaleFactory(quantity=1, unit_price=Decimal('4.50'))
        assert SaleLedger().total_amount() == Decimal('10.50')

    def test_total_amount_of_empty_ledger(self):
        assert SaleLedger().total_amount() == Decimal('0')

    def test_recent_respects_limit_and_order(self):
        now = timezone.now()
        SaleFactory(date=now - timedelta(days=2), customer_name='oldest')
        SaleFactory(date=now, customer_name='newest')
        SaleFactory(date=now - timedelta(days=1), customer_name='middle')
        recent = SaleLedger().recent(limit=2)
        assert [s.customer_name for s in recent] == ['newest', 'middle']

    def test_database_failure_reported_as_unavailable(self, monkeypatch):
        def broken(*args, **kwargs):
            raise OperationalError('server closed the connection unexpectedly')

        monkeypatch.setattr(Sale.objects, 'aggregate', broken)
        with pytest.raises(ServiceUnavailableError):
            SaleLedger().total_amount()
