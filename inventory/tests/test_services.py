"""
Tests — ProductService: intake, update, stock receipt and removal.

@file inventory/tests/test_services.py
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from core.exceptions import DuplicateResourceError, ResourceNotFoundError
from core.models import AuditLog
from inventory.models import Batch, Product
from inventory.services import ProductService
from sales.models import Sale
from tests.factories import ProductFactory, SaleFactory

pytestmark = pytest.mark.django_db


def _lines(*pairs):
    expiry = timezone.localdate() + timedelta(days=200)
    return [
        {'batch_number': number, 'quantity': quantity, 'expiry_date': expiry}
        for number, quantity in pairs
    ]


def _fields(**overrides):
    fields = {
        'brand_name': 'Amoxil',
        'generic_name': 'Amoxicillin',
        'dosage': '250mg',
        'category': 'Antibiotics',
        'unit_price': Decimal('3.00'),
        'box_price': Decimal('60.00'),
        'units_per_box': 20,
    }
    fields.update(overrides)
    return fields


class TestCreateProduct:

    def test_stock_derived_from_batches(self, user):
        product = ProductService().create_product(
            batches=_lines(('A', 30), ('B', 20)), actor=user, **_fields(),
        )
        product.refresh_from_db()
        assert product.current_stock == 50
        assert list(product.batches.values_list('batch_number', flat=True)) == ['A', 'B']
        assert product.created_by == user

    def test_supplied_current_stock_ignored(self):
        product = ProductService().create_product(
            batches=_lines(('A', 5)), current_stock=999, **_fields(),
        )
        assert product.current_stock == 5

    def test_no_batches_means_zero_stock(self):
        product = ProductService().create_product(batches=[], **_fields())
        assert product.current_stock == 0

    def test_zero_quantity_batches_not_stored(self):
        product = ProductService().create_product(
            batches=_lines(('EMPTY', 0), ('A', 6)), **_fields(),
        )
        assert list(product.batches.values_list('batch_number', 'position')) == [('A', 0)]
        assert product.current_stock == 6

    def test_audit_entry_written(self, user):
        product = ProductService().create_product(batches=_lines(('A', 5)), actor=user, **_fields())
        entry = AuditLog.objects.get(object_id=str(product.pk))
        assert entry.action == AuditLog.ActionChoices.CREATE
        assert entry.actor == user
        assert entry.new_values['current_stock'] == 5
        assert entry.new_values['batches'][0]['batch_number'] == 'A'

    def test_negative_batch_quantity_rejected(self):
        with pytest.raises(ValidationError):
            ProductService().create_product(batches=_lines(('A', -1)), **_fields())
        assert Product.objects.count() == 0

    def test_negative_unit_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductService().create_product(
                batches=_lines(('A', 1)), **_fields(unit_price=Decimal('-1')),
            )
        assert Product.objects.count() == 0

    def test_duplicate_barcode_rejected(self):
        ProductFactory(barcode='6001234567890')
        with pytest.raises(DuplicateResourceError):
            ProductService().create_product(
                batches=_lines(('A', 1)), **_fields(barcode='6001234567890'),
            )

    def test_blank_barcode_stored_as_null(self):
        ProductFactory(barcode=None)
        product = ProductService().create_product(batches=[], **_fields(barcode='  '))
        assert product.barcode is None


class TestUpdateProduct:

    def test_batches_replace_existing_ledger(self):
        product = ProductFactory()
        updated = ProductService().update_product(
            product_id=product.pk, batches=_lines(('N1', 4), ('N2', 6)),
        )
        assert updated.current_stock == 10
        assert list(updated.batches.values_list('batch_number', flat=True)) == ['N1', 'N2']

    def test_partial_update_keeps_batches(self):
        product = ProductFactory(batches=_lines(('A', 8)))
        updated = ProductService().update_product(product_id=product.pk, category='Cold & Flu')
        updated.refresh_from_db()
        assert updated.category == 'Cold & Flu'
        assert updated.current_stock == 8
        assert list(updated.batches.values_list('batch_number', flat=True)) == ['A']

    def test_current_stock_cannot_be_set(self):
        product = ProductFactory(batches=_lines(('A', 8)))
        updated = ProductService().update_product(product_id=product.pk, current_stock=1000)
        assert updated.current_stock == 8

    def test_own_barcode_is_not_a_conflict(self):
        product = ProductFactory(barcode='111')
        updated = ProductService().update_product(product_id=product.pk, barcode='111')
        assert updated.barcode == '111'

    def test_other_products_barcode_rejected(self):
        ProductFactory(barcode='111')
        product = ProductFactory(barcode='222')
        with pytest.raises(DuplicateResourceError):
            ProductService().update_product(product_id=product.pk, barcode='111')

    def test_unknown_product(self):
        with pytest.raises(ResourceNotFoundError):
            ProductService().update_product(
                product_id='00000000-0000-0000-0000-000000000000', category='X',
            )

    def test_audit_records_old_and_new_values(self, user):
        product = ProductFactory(batches=_lines(('A', 8)))
        ProductService().update_product(product_id=product.pk, batches=_lines(('B', 2)), actor=user)
        entry = AuditLog.objects.get(action=AuditLog.ActionChoices.UPDATE)
        assert entry.old_values['current_stock'] == 8
        assert entry.new_values['current_stock'] == 2


class TestReceiveBatches:

    def test_new_batches_appended_after_existing(self):
        product = ProductFactory(batches=_lines(('OLD', 3)))
        updated = ProductService().receive_batches(
            product_id=product.pk, batches=_lines(('NEW1', 10), ('NEW2', 5)),
        )
        assert updated.current_stock == 18
        assert list(updated.batches.values_list('batch_number', flat=True)) == ['OLD', 'NEW1', 'NEW2']
        assert list(updated.batches.values_list('position', flat=True)) == [0, 1, 2]

    def test_zero_quantity_intake_not_stored(self):
        product = ProductFactory(batches=_lines(('OLD', 3)))
        updated = ProductService().receive_batches(
            product_id=product.pk, batches=_lines(('EMPTY', 0)),
        )
        assert list(updated.batches.values_list('batch_number', flat=True)) == ['OLD']
        assert updated.current_stock == 3

    def test_invalid_batch_leaves_ledger_unchanged(self):
        product = ProductFactory(batches=_lines(('OLD', 3)))
        with pytest.raises(ValidationError):
            ProductService().receive_batches(product_id=product.pk, batches=_lines(('BAD', -2)))
        product.refresh_from_db()
        assert product.current_stock == 3
        assert product.batches.count() == 1


class TestDeleteProduct:

    def test_hard_delete_removes_record_and_batches(self):
        product = ProductFactory()
        ProductService().delete_product(product_id=product.pk)
        assert not Product.objects.filter(pk=product.pk).exists()
        assert Batch.objects.count() == 0

    def test_sales_history_kept(self):
        product = ProductFactory()
        SaleFactory(product_id=product.pk)
        ProductService().delete_product(product_id=product.pk)
        assert Sale.objects.filter(product_id=product.pk).count() == 1

    def test_audit_keeps_deleted_values(self):
        product = ProductFactory(brand_name='Zyrtec')
        ProductService().delete_product(product_id=product.pk)
        entry = AuditLog.objects.get(action=AuditLog.ActionChoices.DELETE)
        assert entry.object_id == str(product.pk)
        assert entry.old_values['brand_name'] == 'Zyrtec'

    def test_unknown_product(self):
        with pytest.raises(ResourceNotFoundError):
            ProductService().delete_product(product_id='00000000-0000-0000-0000-000000000000')


class TestRowLocking:

    def test_update_locks_product_row(self, row_locks):
        product = ProductFactory()
        ProductService().update_product(product_id=product.pk, category='Vitamins')
        assert row_locks == [Product]

    def test_intake_locks_product_row(self, row_locks):
        product = ProductFactory()
        ProductService().receive_batches(product_id=product.pk, batches=_lines(('N', 1)))
        assert row_locks == [Product]

    def test_delete_locks_product_row(self, row_locks):
        product = ProductFactory()
        ProductService().delete_product(product_id=product.pk)
        assert row_locks == [Product]
