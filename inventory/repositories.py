"""
Inventory — Product Repository

ORM access to product records and their batch ledgers. Services and
read-side engines receive an instance of ProductRepository instead of
querying models directly, so tests can substitute their own.

@file inventory/repositories.py
"""

import logging

from core.exceptions import ResourceNotFoundError

from .ledger import BatchLine, ProductSnapshot, total_stock
from .models import Batch, Product

logger = logging.getLogger('pharmaledger')


class ProductRepository:
    """Loads product snapshots and writes batch ledgers back atomically with stock."""

    def queryset(self):
        return Product.objects.prefetch_related('batches')

    def snapshots(self) -> list[ProductSnapshot]:
        """Every product record as a snapshot, in default product ordering."""
        return [product.to_snapshot() for product in self.queryset()]

    def get(self, product_id) -> Product:
        try:
            return self.queryset().get(pk=product_id)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

    def get_by_barcode(self, barcode: str) -> Product:
        try:
            return self.queryset().get(barcode=barcode)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

    def lock(self, product_id) -> Product:
        """
        Fetch a product with a row lock. Must be called inside
        transaction.atomic; the lock is held until the transaction ends.
        """
        try:
            return Product.objects.select_for_update().get(pk=product_id)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

    def barcode_taken(self, barcode: str | None, exclude_id=None) -> bool:
        if not barcode:
            return False
        qs = Product.objects.filter(barcode=barcode)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        return qs.exists()

    def write_batches(self, product: Product, lines: list[BatchLine], *, actor=None) -> Product:
        """
        Replace product's batches with lines (in order) and store the
        derived current_stock in the same transaction. Lines with no
        quantity left are not stored.
        """
        lines = [line for line in lines if line.quantity > 0]
        product.batches.all().delete()
        Batch.objects.bulk_create([
            Batch(
                product=product,
                position=position,
                batch_number=line.batch_number,
                quantity=line.quantity,
                expiry_date=line.expiry_date,
            )
            for position, line in enumerate(lines)
        ])
        # Drop any prefetched rows so later reads see the new ledger.
        getattr(product, '_prefetched_objects_cache', {}).pop('batches', None)
        product.current_stock = total_stock(lines)
        product.updated_by = actor if getattr(actor, 'is_authenticated', False) else None
        product.save(update_fields=['current_stock', 'updated_by', 'updated_at'])
        logger.debug(
            'Product %s batches rewritten: %d batches, stock=%d',
            product.pk, len(lines), product.current_stock,
        )
        return product

    def categories(self) -> list[str]:
        return list(
            Product.objects.order_by('category')
            .values_list('category', flat=True)
            .distinct()
        )
