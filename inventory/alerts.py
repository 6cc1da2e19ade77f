"""
Inventory — Alert Engine

Classifies stock risk across all product records: products due for
reorder and batches that are close to (or past) expiry. Read-only and
uncached; safe to run while sales are being recorded.

@file inventory/alerts.py
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from core.constants import CRITICAL_EXPIRY_DAYS, EXPIRY_ALERT_WINDOW_DAYS, LOW_STOCK_THRESHOLD

from .ledger import ProductSnapshot, days_remaining


@dataclass(frozen=True)
class ExpiringItem:
    product_id: object
    brand_name: str
    generic_name: str
    category: str
    batch_number: str
    quantity: int
    expiry_date: date
    days_remaining: int


@dataclass(frozen=True)
class ReorderItem:
    product_id: object
    brand_name: str
    generic_name: str
    category: str
    current_stock: int


@dataclass(frozen=True)
class AlertSummary:
    total_expiring: int
    total_reorder: int
    critical_expiry: int
    out_of_stock: int


@dataclass(frozen=True)
class AlertReport:
    expiring_items: tuple
    reorder_items: tuple
    summary: AlertSummary


def is_low_stock(record: ProductSnapshot) -> bool:
    return record.current_stock <= LOW_STOCK_THRESHOLD


def compute_alerts(records: Iterable[ProductSnapshot], today) -> AlertReport:
    """
    Reorder items: every record at or below LOW_STOCK_THRESHOLD, emptiest
    first. Expiring items: every batch still holding stock with at most
    EXPIRY_ALERT_WINDOW_DAYS remaining, expired batches included, most
    urgent first. Both sorts are stable.
    """
    expiring = []
    reorder = []

    for record in records:
        if is_low_stock(record):
            reorder.append(ReorderItem(
                product_id=record.id,
                brand_name=record.brand_name,
                generic_name=record.generic_name,
                category=record.category,
                current_stock=record.current_stock,
            ))

        for batch in record.batches:
            if batch.quantity == 0:
                continue
            remaining = days_remaining(batch.expiry_date, today)
            if remaining <= EXPIRY_ALERT_WINDOW_DAYS:
                expiring.append(ExpiringItem(
                    product_id=record.id,
                    brand_name=record.brand_name,
                    generic_name=record.generic_name,
                    category=record.category,
                    batch_number=batch.batch_number,
                    quantity=batch.quantity,
                    expiry_date=batch.expiry_date,
                    days_remaining=remaining,
                ))

    expiring.sort(key=lambda item: item.days_remaining)
    reorder.sort(key=lambda item: item.current_stock)

    summary = AlertSummary(
        total_expiring=len(expiring),
        total_reorder=len(reorder),
        critical_expiry=sum(1 for item in expiring if item.days_remaining <= CRITICAL_EXPIRY_DAYS),
        out_of_stock=sum(1 for item in reorder if item.current_stock == 0),
    )
    return AlertReport(
        expiring_items=tuple(expiring),
        reorder_items=tuple(reorder),
        summary=summary,
    )
