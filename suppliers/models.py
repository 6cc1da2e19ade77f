"""
Suppliers — Models

Directory of stock suppliers. Plain reference data with no stock
invariants.

@file suppliers/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class Supplier(BaseModel):
    name = models.CharField(_('name'), max_length=255)
    contact_person = models.CharField(_('contact person'), max_length=255, blank=True)
    phone = models.CharField(_('phone'), max_length=30)
    email = models.EmailField(_('email'), blank=True)
    address = models.CharField(_('address'), max_length=255, blank=True)
    city = models.CharField(_('city'), max_length=100)
    country = models.CharField(_('country'), max_length=100)
    last_delivery_date = models.DateField(_('last delivery date'), null=True, blank=True)
    total_stock_delivered = models.PositiveIntegerField(_('total stock delivered'), default=0)
    notes = models.TextField(_('notes'), blank=True)

    class Meta:
        verbose_name = _('supplier')
        verbose_name_plural = _('suppliers')
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.name} ({self.city}, {self.country})'
