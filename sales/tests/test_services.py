"""
Tests — SaleService: atomic depletion plus ledger append.

@file sales/tests/test_services.py
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from core.exceptions import InsufficientStockError, ResourceNotFoundError
from core.models import AuditLog
from inventory.models import Product
from sales.models import Sale
from sales.repositories import SaleLedger
from sales.services import SaleService
from tests.factories import ProductFactory

pytestmark = pytest.mark.django_db


def _product(*pairs, unit_price='2.00'):
    expiry = timezone.localdate() + timedelta(days=200)
    return ProductFactory(
        unit_price=Decimal(unit_price),
        batches=[
            {'batch_number': number, 'quantity': quantity, 'expiry_date': expiry}
            for number, quantity in pairs
        ],
    )


def _remaining(product):
    return list(product.batches.values_list('batch_number', 'quantity'))


class BrokenLedger(SaleLedger):
    def append(self, **kwargs):
        raise RuntimeError('ledger write failed')


class TestRecordSale:

    def test_fifo_depletion_across_batches(self, user):
        product = _product(('A', 5), ('B', 5))
        sale = SaleService().record_sale(product_id=product.pk, quantity=7, actor=user)

        product.refresh_from_db()
        assert _remaining(product) == [('B', 3)]
        assert product.current_stock == 3
        assert sale.quantity == 7
        assert sale.total_amount == Decimal('14.00')
        assert sale.batch_number == 'A'
        assert sale.created_by == user

    def test_sale_copies_product_details(self):
        product = _product(('A', 5), unit_price='4.20')
        sale = SaleService().record_sale(
            product_id=product.pk, quantity=1,
            customer_name='Jane', payment_method=Sale.PaymentMethod.MOBILE,
        )
        assert sale.product_id == product.pk
        assert sale.brand_name == product.brand_name
        assert sale.generic_name == product.generic_name
        assert sale.unit_price == Decimal('4.20')
        assert sale.customer_name == 'Jane'
        assert sale.payment_method == Sale.PaymentMethod.MOBILE

    def test_exhausted_batch_removed(self):
        product = _product(('A', 5), ('B', 5))
        SaleService().record_sale(product_id=product.pk, quantity=5)
        assert _remaining(product) == [('B', 5)]

    def test_insufficient_stock_changes_nothing(self):
        product = _product(('A', 5), ('B', 5))
        with pytest.raises(InsufficientStockError):
            SaleService().record_sale(product_id=product.pk, quantity=11)
        product.refresh_from_db()
        assert product.current_stock == 10
        assert _remaining(product) == [('A', 5), ('B', 5)]
        assert Sale.objects.count() == 0

    def test_unknown_product(self):
        with pytest.raises(ResourceNotFoundError):
            SaleService().record_sale(product_id=uuid.uuid4(), quantity=1)
        assert Sale.objects.count() == 0

    @pytest.mark.parametrize('quantity', [0, -2])
    def test_non_positive_quantity_rejected(self, quantity):
        product = _product(('A', 5))
        with pytest.raises(ValidationError):
            SaleService().record_sale(product_id=product.pk, quantity=quantity)
        assert _remaining(product) == [('A', 5)]

    def test_ledger_failure_rolls_back_depletion(self):
        product = _product(('A', 5))
        service = SaleService(ledger=BrokenLedger())
        with pytest.raises(RuntimeError):
            service.record_sale(product_id=product.pk, quantity=2)
        product.refresh_from_db()
        assert product.current_stock == 5
        assert _remaining(product) == [('A', 5)]

    def test_last_unit_can_only_be_sold_once(self):
        product = _product(('A', 1))
        service = SaleService()
        service.record_sale(product_id=product.pk, quantity=1)
        with pytest.raises(InsufficientStockError):
            service.record_sale(product_id=product.pk, quantity=1)
        product.refresh_from_db()
        assert product.current_stock == 0
        assert product.batches.count() == 0
        assert Sale.objects.count() == 1

    def test_sequential_sales_never_oversell(self):
        product = _product(('A', 4), ('B', 3))
        service = SaleService()
        sold = 0
        for _ in range(10):
            try:
                service.record_sale(product_id=product.pk, quantity=2)
                sold += 2
            except InsufficientStockError:
                pass
        product.refresh_from_db()
        assert sold == 6
        assert product.current_stock == 1
        assert sum(s.quantity for s in Sale.objects.all()) == 6

    def test_audit_records_allocations(self):
        product = _product(('A', 2), ('B', 5))
        sale = SaleService().record_sale(product_id=product.pk, quantity=4)
        entry = AuditLog.objects.get(model_name='Sale', object_id=str(sale.pk))
        assert entry.new_values['allocations'] == [['A', 2], ['B', 2]]
        assert entry.new_values['stock_before'] == 7
        assert entry.new_values['stock_after'] == 3


class TestRowLocking:

    def test_sale_locks_product_row(self, row_locks):
        product = _product(('A', 5))
        SaleService().record_sale(product_id=product.pk, quantity=1)
        assert row_locks == [Product]

    def test_batches_read_after_lock(self, row_locks, monkeypatch):
        product = _product(('A', 5))
        locked_when_read = []
        to_snapshot = Product.to_snapshot

        def recording_to_snapshot(instance):
            locked_when_read.append(list(row_locks))
            return to_snapshot(instance)

        monkeypatch.setattr(Product, 'to_snapshot', recording_to_snapshot)
        SaleService().record_sale(product_id=product.pk, quantity=1)
        assert locked_when_read == [[Product]]

    def test_failed_sale_still_takes_lock(self, row_locks):
        product = _product(('A', 1))
        with pytest.raises(InsufficientStockError):
            SaleService().record_sale(product_id=product.pk, quantity=2)
        assert row_locks == [Product]
