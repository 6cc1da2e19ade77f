"""
Suppliers — Django Admin Configuration

@file suppliers/admin.py
"""

from django.contrib import admin

from .models import Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'contact_person', 'phone', 'city', 'country',
        'last_delivery_date', 'total_stock_delivered',
    )
    list_filter = ('country', 'city')
    search_fields = ('name', 'contact_person', 'phone', 'email')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    ordering = ('name',)
