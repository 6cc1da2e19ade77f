"""
Sales — Django Admin Configuration

Read-only list of Sale. No edit, no delete (insert-only).

@file sales/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Sale


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = (
        'date', 'brand_name', 'quantity', 'unit_price', 'total_amount',
        'batch_number', 'payment_method', 'customer_name', 'created_by',
    )
    list_filter = ('payment_method', 'date')
    search_fields = ('brand_name', 'generic_name', 'customer_name', 'batch_number')
    readonly_fields = (
        'id', 'product_id', 'brand_name', 'generic_name', 'quantity',
        'unit_price', 'total_amount', 'batch_number', 'customer_name',
        'payment_method', 'date', 'created_by', 'created_at',
    )
    list_select_related = ('created_by',)
    list_per_page = 50
    date_hierarchy = 'date'
    ordering = ('-date',)

    fieldsets = (
        (_('Sale'), {
            'fields': ('id', 'date', 'payment_method', 'customer_name'),
        }),
        (_('Product'), {
            'fields': ('product_id', 'brand_name', 'generic_name', 'batch_number'),
        }),
        (_('Amounts'), {
            'fields': ('quantity', 'unit_price', 'total_amount'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
