"""
Sales — Serializers

@file sales/serializers.py
"""

from rest_framework import serializers

from .models import Sale


class SaleReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = Sale
        fields = [
            'id', 'product_id', 'brand_name', 'generic_name',
            'quantity', 'unit_price', 'total_amount', 'batch_number',
            'customer_name', 'payment_method', 'date', 'created_at',
        ]
        read_only_fields = fields


class SaleCreateSerializer(serializers.Serializer):
    product = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    customer_name = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default='',
    )
    payment_method = serializers.ChoiceField(
        choices=Sale.PaymentMethod.choices,
        required=False, default=Sale.PaymentMethod.CASH,
    )
