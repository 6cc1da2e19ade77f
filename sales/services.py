"""
Sales — Service Layer

Records a sale: lock the product row, run the depletion engine over
its batches, write the remaining batches and derived stock, append the
sale. All of it commits or rolls back together, so concurrent sales of
the same product serialise on the row lock.

@file sales/services.py
"""

import logging

from django.db import transaction

from core.constants import AUDIT_ACTION_CREATE
from core.services import AuditService
from inventory.ledger import deplete
from inventory.repositories import ProductRepository

from .models import Sale
from .repositories import SaleLedger

logger = logging.getLogger('pharmaledger')


class SaleService:
    """Sale recording on top of a ProductRepository and a SaleLedger."""

    def __init__(
        self,
        products: ProductRepository | None = None,
        ledger: SaleLedger | None = None,
    ):
        self.products = products or ProductRepository()
        self.ledger = ledger or SaleLedger()

    @transaction.atomic
    def record_sale(
        self,
        *,
        product_id,
        quantity: int,
        customer_name: str = '',
        payment_method: str = Sale.PaymentMethod.CASH,
        actor=None,
    ) -> Sale:
        """
        Deplete quantity units FIFO by batch order and append the sale.

        Raises ResourceNotFoundError, InsufficientStockError or
        ValidationError; on any of them the product is left unchanged.
        """
        product = self.products.lock(product_id)
        stock_before = product.current_stock

        result = deplete(product.to_snapshot(), quantity)
        self.products.write_batches(product, list(result.batches), actor=actor)

        sale = self.ledger.append(
            product=product,
            quantity=quantity,
            batch_number=result.first_batch_number,
            customer_name=customer_name,
            payment_method=payment_method,
            actor=actor,
        )

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Sale',
            object_id=str(sale.pk),
            new_values={
                'product_id': str(product.pk),
                'quantity': quantity,
                'total_amount': str(sale.total_amount),
                'allocations': [list(allocation) for allocation in result.allocations],
                'stock_before': stock_before,
                'stock_after': product.current_stock,
            },
        )
        logger.info(
            'Sale %s product=%s qty=%s stock %d -> %d allocations=%s',
            sale.pk, product.pk, quantity, stock_before, product.current_stock,
            result.allocations,
        )
        return sale
