"""
Inventory — Serializers

Product records with their nested, ordered batch list. current_stock
is read-only: it is always derived from the batches by the service
layer.

@file inventory/serializers.py
"""

from rest_framework import serializers

from .models import Batch, Product


class BatchSerializer(serializers.ModelSerializer):
    days_to_expiry = serializers.IntegerField(read_only=True)

    class Meta:
        model = Batch
        fields = ['batch_number', 'quantity', 'expiry_date', 'days_to_expiry']

    def validate_batch_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Batch number is required.')
        return value


class ProductSerializer(serializers.ModelSerializer):
    """
    Used for both reads and writes. Writes are handed to ProductService;
    batches are validated here and persisted there.
    """

    batches = BatchSerializer(many=True)

    class Meta:
        model = Product
        fields = [
            'id', 'brand_name', 'generic_name', 'dosage', 'category',
            'current_stock', 'unit_price', 'box_price', 'units_per_box',
            'barcode', 'batches',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'current_stock', 'created_at', 'updated_at']

    def validate_barcode(self, value):
        if value is None:
            return None
        return value.strip() or None

    def validate_unit_price(self, value):
        if value < 0:
            raise serializers.ValidationError('Unit price cannot be negative.')
        return value

    def validate_box_price(self, value):
        if value < 0:
            raise serializers.ValidationError('Box price cannot be negative.')
        return value


class StockIntakeSerializer(serializers.Serializer):
    batches = BatchSerializer(many=True, allow_empty=False)
