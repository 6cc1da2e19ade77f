"""
Analytics — Service Layer

Read-side queries over the current product records and the sale
ledger: stock alerts and dashboard metrics. Nothing here writes or
locks; a slightly stale snapshot is acceptable.

@file analytics/services.py
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from django.utils import timezone

from core.constants import EXPIRY_ALERT_WINDOW_DAYS, RECENT_SALES_LIMIT
from core.exceptions import ServiceUnavailableError
from inventory.alerts import AlertReport, compute_alerts, is_low_stock
from inventory.ledger import ProductSnapshot, days_remaining
from inventory.repositories import ProductRepository
from sales.repositories import SaleLedger

logger = logging.getLogger('pharmaledger')


@dataclass(frozen=True)
class DashboardMetrics:
    total_inventory_value: Decimal
    low_stock_count: int
    expiring_soon_count: int
    total_sales_value: Decimal
    recent_sales: tuple


def compute_dashboard(records: Iterable[ProductSnapshot], ledger: SaleLedger, today) -> DashboardMetrics:
    """
    Fold product records and the sale ledger into dashboard metrics.

    Unlike the alert engine, expiring_soon_count ignores batches that
    have already expired. A ledger that raises ServiceUnavailableError
    yields zero sales and an empty recent list instead of an error.
    """
    records = list(records)

    total_inventory_value = sum(
        (record.current_stock * record.unit_price for record in records),
        Decimal('0'),
    )
    low_stock_count = sum(1 for record in records if is_low_stock(record))
    expiring_soon_count = sum(
        1
        for record in records
        for batch in record.batches
        if batch.quantity > 0
        and 0 <= days_remaining(batch.expiry_date, today) <= EXPIRY_ALERT_WINDOW_DAYS
    )

    try:
        total_sales_value = ledger.total_amount()
        recent_sales = tuple(ledger.recent(RECENT_SALES_LIMIT))
    except ServiceUnavailableError as exc:
        logger.warning('Dashboard built without sales data: %s', exc.detail)
        total_sales_value = Decimal('0')
        recent_sales = ()

    return DashboardMetrics(
        total_inventory_value=total_inventory_value,
        low_stock_count=low_stock_count,
        expiring_soon_count=expiring_soon_count,
        total_sales_value=total_sales_value,
        recent_sales=recent_sales,
    )


class InsightsService:
    """Alerts and dashboard over injected repositories."""

    def __init__(
        self,
        products: ProductRepository | None = None,
        ledger: SaleLedger | None = None,
    ):
        self.products = products or ProductRepository()
        self.ledger = ledger or SaleLedger()

    def get_alerts(self, as_of=None) -> AlertReport:
        today = as_of or timezone.localdate()
        return compute_alerts(self.products.snapshots(), today)

    def get_dashboard(self, as_of=None) -> DashboardMetrics:
        today = as_of or timezone.localdate()
        return compute_dashboard(self.products.snapshots(), self.ledger, today)
