"""
Inventory — Filters

@file inventory/filters.py
"""

import django_filters

from .models import Product

# Category value sent by the inventory screen when no filter is chosen.
ALL_CATEGORIES = 'All Categories'


class ProductFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(method='filter_category')

    class Meta:
        model = Product
        fields = ['category', 'barcode']

    def filter_category(self, queryset, name, value):
        if not value or value == ALL_CATEGORIES:
            return queryset
        return queryset.filter(category=value)
