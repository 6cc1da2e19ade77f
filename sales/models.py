"""
Sales — Models

Append-only sale ledger. Each row records one completed sale against a
product; product_id is a weak reference (no FK constraint, no cascade)
so deleting a product never rewrites sales history.

@file sales/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Sale(models.Model):
    """
    A single immutable sale event (insert only).

    batch_number is advisory: it names the first batch the sale drew
    from, even when depletion spanned several batches.
    """

    class PaymentMethod(models.TextChoices):
        CASH = 'Cash', _('Cash')
        CARD = 'Card', _('Card')
        MOBILE = 'Mobile', _('Mobile')
        CREDIT = 'Credit', _('Credit')

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )
    product_id = models.UUIDField(
        _('product ID'),
        help_text=_('UUID of the product sold; resolved in the application layer'),
        db_index=True,
    )
    brand_name = models.CharField(_('brand name'), max_length=255)
    generic_name = models.CharField(_('generic name'), max_length=255, blank=True)
    quantity = models.PositiveIntegerField(_('quantity'))
    unit_price = models.DecimalField(_('unit price'), max_digits=12, decimal_places=2)
    total_amount = models.DecimalField(_('total amount'), max_digits=14, decimal_places=2)
    batch_number = models.CharField(
        _('batch number'), max_length=100, null=True, blank=True,
    )
    customer_name = models.CharField(_('customer name'), max_length=255, blank=True)
    payment_method = models.CharField(
        _('payment method'), max_length=10,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )
    date = models.DateTimeField(_('date'), default=timezone.now, db_index=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    # No updated_at — immutable record.

    class Meta:
        verbose_name = _('sale')
        verbose_name_plural = _('sales')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['product_id', 'date'], name='sale_product_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='sale_positive_quantity',
            ),
        ]

    def __str__(self):
        return f'Sale {self.quantity} x {self.brand_name} = {self.total_amount}'

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise NotImplementedError('Sale is insert-only; updates are not allowed.')
        self.total_amount = self.unit_price * self.quantity
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('Sale records cannot be deleted.')
