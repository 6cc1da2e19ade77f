"""
Inventory — Service Layer

Write-side operations on product records: intake, full/partial update,
stock receipt and removal. current_stock is never taken from the
caller; it is recomputed from the batches on every write.

@file inventory/services.py
"""

import logging

from django.db import transaction

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_DELETE, AUDIT_ACTION_UPDATE
from core.exceptions import DuplicateResourceError
from core.services import AuditService

from .ledger import build_lines
from .models import Product
from .repositories import ProductRepository

logger = logging.getLogger('pharmaledger')

# Fields a caller may set directly on a product.
EDITABLE_FIELDS = (
    'brand_name', 'generic_name', 'dosage', 'category',
    'unit_price', 'box_price', 'units_per_box', 'barcode',
)


def _ledger_values(product: Product) -> dict:
    values = AuditService.snapshot(product, fields=EDITABLE_FIELDS)
    values['current_stock'] = product.current_stock
    values['batches'] = [
        {
            'batch_number': line.batch_number,
            'quantity': line.quantity,
            'expiry_date': line.expiry_date.isoformat(),
        }
        for line in product.batch_lines()
    ]
    return values


def _actor_or_none(actor):
    return actor if getattr(actor, 'is_authenticated', False) else None


class ProductService:
    """Product record lifecycle on top of a ProductRepository."""

    def __init__(self, products: ProductRepository | None = None):
        self.products = products or ProductRepository()

    def _normalise_barcode(self, fields: dict, exclude_id=None) -> None:
        if 'barcode' not in fields:
            return
        barcode = (fields['barcode'] or '').strip() or None
        if self.products.barcode_taken(barcode, exclude_id=exclude_id):
            raise DuplicateResourceError(detail=f'Barcode {barcode} is already assigned.')
        fields['barcode'] = barcode

    @transaction.atomic
    def create_product(self, *, batches, actor=None, **fields) -> Product:
        lines = build_lines(batches)
        fields = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        self._normalise_barcode(fields)

        product = Product(**fields)
        product.created_by = _actor_or_none(actor)
        product.full_clean()
        product.save()
        self.products.write_batches(product, lines, actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Product',
            object_id=str(product.pk),
            new_values=_ledger_values(product),
        )
        logger.info(
            'Product %s created: %s, %d batches, stock=%d',
            product.pk, product.brand_name, len(lines), product.current_stock,
        )
        return product

    @transaction.atomic
    def update_product(self, *, product_id, batches=None, actor=None, **fields) -> Product:
        """
        Update product fields. When batches is given it replaces the whole
        batch list; otherwise the existing batches and stock are kept.
        """
        product = self.products.lock(product_id)
        old_values = _ledger_values(product)

        fields = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        self._normalise_barcode(fields, exclude_id=product.pk)
        for field, value in fields.items():
            setattr(product, field, value)

        product.updated_by = _actor_or_none(actor)
        product.full_clean()
        product.save()

        if batches is not None:
            self.products.write_batches(product, build_lines(batches), actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Product',
            object_id=str(product.pk),
            old_values=old_values,
            new_values=_ledger_values(product),
        )
        logger.info('Product %s updated, stock=%d', product.pk, product.current_stock)
        return product

    @transaction.atomic
    def receive_batches(self, *, product_id, batches, actor=None) -> Product:
        """Stock intake: append batches after the existing ones."""
        new_lines = build_lines(batches)
        product = self.products.lock(product_id)
        old_stock = product.current_stock
        lines = product.batch_lines() + new_lines
        self.products.write_batches(product, lines, actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Product',
            object_id=str(product.pk),
            old_values={'current_stock': old_stock},
            new_values={
                'current_stock': product.current_stock,
                'received': [
                    {'batch_number': line.batch_number, 'quantity': line.quantity}
                    for line in new_lines
                ],
            },
        )
        logger.info(
            'Product %s received %d batches, stock %d -> %d',
            product.pk, len(new_lines), old_stock, product.current_stock,
        )
        return product

    @transaction.atomic
    def delete_product(self, *, product_id, actor=None) -> None:
        product = self.products.lock(product_id)
        old_values = _ledger_values(product)
        object_id = str(product.pk)
        product.delete()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='Product',
            object_id=object_id,
            old_values=old_values,
        )
        logger.info('Product %s deleted', object_id)
