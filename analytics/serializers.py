"""
Analytics — Serializers

Output-only serializers for the alert report and dashboard metrics.

@file analytics/serializers.py
"""

from rest_framework import serializers

from sales.serializers import SaleReadSerializer


class AlertQuerySerializer(serializers.Serializer):
    as_of = serializers.DateField(required=False)


class ExpiringItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    brand_name = serializers.CharField()
    generic_name = serializers.CharField()
    category = serializers.CharField()
    batch_number = serializers.CharField()
    quantity = serializers.IntegerField()
    expiry_date = serializers.DateField()
    days_remaining = serializers.IntegerField()


class ReorderItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    brand_name = serializers.CharField()
    generic_name = serializers.CharField()
    category = serializers.CharField()
    current_stock = serializers.IntegerField()


class AlertSummarySerializer(serializers.Serializer):
    total_expiring = serializers.IntegerField()
    total_reorder = serializers.IntegerField()
    critical_expiry = serializers.IntegerField()
    out_of_stock = serializers.IntegerField()


class AlertReportSerializer(serializers.Serializer):
    expiring_items = ExpiringItemSerializer(many=True)
    reorder_items = ReorderItemSerializer(many=True)
    summary = AlertSummarySerializer()


class DashboardSerializer(serializers.Serializer):
    total_inventory_value = serializers.DecimalField(max_digits=18, decimal_places=2)
    low_stock_count = serializers.IntegerField()
    expiring_soon_count = serializers.IntegerField()
    total_sales_value = serializers.DecimalField(max_digits=18, decimal_places=2)
    recent_sales = SaleReadSerializer(many=True)
