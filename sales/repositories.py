"""
Sales — Sale Ledger Repository

Append and read access to the sale ledger. Read failures caused by the
database being unreachable surface as ServiceUnavailableError so that
read-side consumers (the dashboard) can degrade instead of failing.

@file sales/repositories.py
"""

import logging
from decimal import Decimal

from django.db import DatabaseError, InterfaceError
from django.db.models import Sum

from core.constants import RECENT_SALES_LIMIT
from core.exceptions import ServiceUnavailableError

from .models import Sale

logger = logging.getLogger('pharmaledger')


class SaleLedger:
    """Append-only sale history."""

    def append(
        self,
        *,
        product,
        quantity: int,
        batch_number: str | None = None,
        customer_name: str = '',
        payment_method: str = Sale.PaymentMethod.CASH,
        actor=None,
    ) -> Sale:
        sale = Sale(
            product_id=product.pk,
            brand_name=product.brand_name,
            generic_name=product.generic_name,
            quantity=quantity,
            unit_price=product.unit_price,
            batch_number=batch_number,
            customer_name=customer_name or '',
            payment_method=payment_method or Sale.PaymentMethod.CASH,
            created_by=actor if getattr(actor, 'is_authenticated', False) else None,
        )
        sale.save()
        return sale

    def total_amount(self) -> Decimal:
        """Sum of total_amount over every recorded sale."""
        try:
            total = Sale.objects.aggregate(total=Sum('total_amount'))['total']
        except (DatabaseError, InterfaceError) as exc:
            raise ServiceUnavailableError(detail=f'Sale ledger unavailable: {exc}') from exc
        return total if total is not None else Decimal('0')

    def recent(self, limit: int = RECENT_SALES_LIMIT) -> list[Sale]:
        """The most recently dated sales, newest first."""
        try:
            return list(Sale.objects.order_by('-date', '-created_at')[:limit])
        except (DatabaseError, InterfaceError) as exc:
            raise ServiceUnavailableError(detail=f'Sale ledger unavailable: {exc}') from exc
