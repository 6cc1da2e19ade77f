"""
Inventory — Batch Ledger

Value types for a product's batch ledger and the depletion engine that
consumes batches for a sale. Nothing here touches the database:
repositories build snapshots from rows and persist whatever the engine
returns.

Consumption order is the stored batch order (oldest intake first), not
nearest expiry.

@file inventory/ledger.py
"""

import math
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable

from django.core.exceptions import ValidationError

from core.exceptions import InsufficientStockError

ONE_DAY = timedelta(days=1)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class BatchLine:
    """One expiry-dated lot of stock held by a product."""

    batch_number: str
    quantity: int
    expiry_date: date

    def __post_init__(self):
        errors = {}
        if not isinstance(self.batch_number, str) or not self.batch_number.strip():
            errors['batch_number'] = 'Batch number is required.'
        if not _is_int(self.quantity):
            errors['quantity'] = 'Quantity must be an integer.'
        elif self.quantity < 0:
            errors['quantity'] = 'Quantity cannot be negative.'
        if isinstance(self.expiry_date, datetime) or not isinstance(self.expiry_date, date):
            errors['expiry_date'] = 'Expiry date must be a calendar date.'
        if errors:
            raise ValidationError(errors)

    def take(self, quantity: int) -> 'BatchLine':
        return replace(self, quantity=self.quantity - quantity)


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Read model of a product record: identity, pricing and its ordered
    batches. current_stock is always derived from the batches.
    """

    id: object
    brand_name: str
    generic_name: str
    category: str
    unit_price: Decimal
    batches: tuple = ()
    dosage: str = ''

    def __post_init__(self):
        if self.unit_price is None:
            raise ValidationError({'unit_price': 'Unit price is required.'})
        try:
            price = Decimal(str(self.unit_price))
        except InvalidOperation:
            raise ValidationError({'unit_price': 'Unit price must be a number.'})
        if not price.is_finite() or price < 0:
            raise ValidationError({'unit_price': 'Unit price cannot be negative.'})
        object.__setattr__(self, 'unit_price', price)

        batches = tuple(self.batches)
        for batch in batches:
            if not isinstance(batch, BatchLine):
                raise ValidationError({'batches': 'Every batch must be a BatchLine.'})
        object.__setattr__(self, 'batches', batches)

    @property
    def current_stock(self) -> int:
        return total_stock(self.batches)


@dataclass(frozen=True)
class DepletionResult:
    """Batches left after a sale plus what was drawn from each batch."""

    batches: tuple
    allocations: tuple

    @property
    def current_stock(self) -> int:
        return total_stock(self.batches)

    @property
    def first_batch_number(self) -> str | None:
        if not self.allocations:
            return None
        return self.allocations[0][0]


def total_stock(batches: Iterable[BatchLine]) -> int:
    return sum(batch.quantity for batch in batches)


def build_lines(raw_batches: Iterable) -> list[BatchLine]:
    """Coerce dicts (serializer output) or BatchLines into BatchLines."""
    lines = []
    for raw in raw_batches:
        if isinstance(raw, BatchLine):
            lines.append(raw)
            continue
        lines.append(BatchLine(
            batch_number=raw.get('batch_number'),
            quantity=raw.get('quantity'),
            expiry_date=raw.get('expiry_date'),
        ))
    return lines


def deplete(record: ProductSnapshot, requested_qty: int) -> DepletionResult:
    """
    Consume requested_qty units from record's batches in stored order.

    Raises ValidationError for a non-positive quantity and
    InsufficientStockError when the record cannot cover the sale; in
    both cases nothing is consumed. Batches that reach zero are dropped
    from the result.
    """
    if not _is_int(requested_qty) or requested_qty <= 0:
        raise ValidationError({'quantity': 'Quantity must be a positive integer.'})

    available = record.current_stock
    if requested_qty > available:
        raise InsufficientStockError(
            detail=f'Insufficient stock: available={available}, requested={requested_qty}.',
        )

    remaining = requested_qty
    kept = []
    allocations = []
    for batch in record.batches:
        taken = min(batch.quantity, remaining)
        if taken:
            allocations.append((batch.batch_number, taken))
            remaining -= taken
            batch = batch.take(taken)
        if batch.quantity > 0:
            kept.append(batch)

    return DepletionResult(batches=tuple(kept), allocations=tuple(allocations))


def days_remaining(expiry_date: date, today) -> int:
    """
    Whole days from today until expiry_date, rounded up.

    today may be a date or an aware datetime; a datetime is measured
    against the start of the expiry day in the same timezone.
    """
    if isinstance(today, datetime):
        expires_at = datetime.combine(expiry_date, time.min, tzinfo=today.tzinfo)
        return math.ceil((expires_at - today) / ONE_DAY)
    return (expiry_date - today).days
