"""
Inventory — Django Admin Configuration

Products with a read-only batch inline and expiry colour coding.
Batches are only written through ProductService / SaleService so the
stored stock never drifts from the batch quantities.

@file inventory/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.constants import EXPIRY_ALERT_WINDOW_DAYS, LOW_STOCK_THRESHOLD

from .models import Batch, Product


def _render_expiry_badge(batch):
    days = batch.days_to_expiry
    if days < 0:
        color, label = '#dc2626', f'EXPIRED ({abs(days)}d ago)'
    elif days <= EXPIRY_ALERT_WINDOW_DAYS:
        color, label = '#f97316', f'{days}d left'
    else:
        color, label = '#22c55e', f'{days}d left'
    return format_html(
        '<span style="background:{};color:#fff;padding:2px 8px;'
        'border-radius:4px;font-size:11px;font-weight:600;">{}</span>',
        color, label,
    )


class BatchInline(admin.TabularInline):
    model = Batch
    extra = 0
    can_delete = False
    fields = ('position', 'batch_number', 'quantity', 'expiry_date', 'expiry_badge')
    readonly_fields = fields
    ordering = ('position',)

    def has_add_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Expiry'))
    def expiry_badge(self, obj):
        return _render_expiry_badge(obj)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        'brand_name', 'generic_name', 'dosage', 'category',
        'stock_badge', 'unit_price', 'barcode', 'created_at',
    )
    list_filter = ('category',)
    search_fields = ('brand_name', 'generic_name', 'barcode')
    readonly_fields = (
        'id', 'current_stock', 'created_at', 'updated_at', 'created_by', 'updated_by',
    )
    list_per_page = 30
    ordering = ('brand_name',)
    inlines = [BatchInline]

    fieldsets = (
        (_('Identification'), {
            'fields': ('id', 'brand_name', 'generic_name', 'dosage', 'category', 'barcode'),
        }),
        (_('Pricing'), {
            'fields': ('unit_price', 'box_price', 'units_per_box'),
        }),
        (_('Stock'), {
            'fields': ('current_stock',),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Stock'), ordering='current_stock')
    def stock_badge(self, obj):
        if obj.current_stock == 0:
            color = '#dc2626'
        elif obj.current_stock <= LOW_STOCK_THRESHOLD:
            color = '#f97316'
        else:
            color = '#22c55e'
        return format_html(
            '<span style="background:{};color:#fff;padding:2px 8px;'
            'border-radius:4px;font-size:11px;font-weight:600;">{}</span>',
            color, obj.current_stock,
        )
