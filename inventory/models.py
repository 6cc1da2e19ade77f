"""
Inventory — Models

A product record owns an ordered list of expiry-dated batches. The
stored current_stock always equals the sum of its batch quantities;
it is only ever written together with the batches (see
inventory/repositories.py).

@file inventory/models.py
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel

from .ledger import BatchLine, ProductSnapshot


class Product(BaseModel):
    """
    One distinct medication / dosage SKU held in stock.

    Hard-deleted on removal; recorded sales keep a weak reference by id.
    """

    brand_name = models.CharField(_('brand name'), max_length=255)
    generic_name = models.CharField(_('generic name'), max_length=255)
    dosage = models.CharField(
        _('dosage'), max_length=100,
        help_text=_('e.g. 500mg, 250mg/5ml'),
    )
    category = models.CharField(_('category'), max_length=100, db_index=True)
    current_stock = models.PositiveIntegerField(
        _('current stock'), default=0, editable=False,
        help_text=_('Derived: sum of batch quantities'),
    )
    unit_price = models.DecimalField(
        _('unit price'), max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    box_price = models.DecimalField(
        _('box price'), max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    units_per_box = models.PositiveIntegerField(
        _('units per box'), default=1,
        validators=[MinValueValidator(1)],
    )
    barcode = models.CharField(
        _('barcode'), max_length=64,
        null=True, blank=True, unique=True,
    )

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['brand_name'], name='product_brand_idx'),
            models.Index(fields=['generic_name'], name='product_generic_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(unit_price__gte=0),
                name='product_unit_price_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(box_price__gte=0),
                name='product_box_price_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(units_per_box__gte=1),
                name='product_units_per_box_positive',
            ),
        ]

    def __str__(self):
        return f'{self.brand_name} ({self.generic_name}) {self.dosage}'

    def clean(self):
        super().clean()
        if self.barcode is not None:
            self.barcode = self.barcode.strip() or None

    def batch_lines(self) -> list[BatchLine]:
        return [batch.to_line() for batch in self.batches.all()]

    def to_snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            id=self.pk,
            brand_name=self.brand_name,
            generic_name=self.generic_name,
            dosage=self.dosage,
            category=self.category,
            unit_price=self.unit_price,
            batches=self.batch_lines(),
        )


class Batch(models.Model):
    """
    A lot of stock belonging to exactly one product. position is the
    intake order and therefore the consumption order for sales.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='batches',
        verbose_name=_('product'),
    )
    position = models.PositiveIntegerField(_('position'))
    batch_number = models.CharField(_('batch number'), max_length=100)
    quantity = models.PositiveIntegerField(_('quantity'))
    expiry_date = models.DateField(_('expiry date'), db_index=True)

    class Meta:
        verbose_name = _('batch')
        verbose_name_plural = _('batches')
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'position'],
                name='unique_batch_position_per_product',
            ),
        ]

    def __str__(self):
        return f'Batch {self.batch_number} x{self.quantity} (exp. {self.expiry_date})'

    @property
    def days_to_expiry(self) -> int:
        return (self.expiry_date - timezone.localdate()).days

    def to_line(self) -> BatchLine:
        return BatchLine(
            batch_number=self.batch_number,
            quantity=self.quantity,
            expiry_date=self.expiry_date,
        )
