"""
Sales — Views

Recording a sale goes through SaleService; listing and retrieval read
the ledger directly.

@file sales/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from inventory.repositories import ProductRepository

from .models import Sale
from .repositories import SaleLedger
from .serializers import SaleCreateSerializer, SaleReadSerializer
from .services import SaleService


class SaleViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Append-only sale ledger: create, list (newest first), retrieve."""

    permission_classes = [IsAuthenticated]
    filterset_fields = ['product_id', 'payment_method']
    search_fields = ['brand_name', 'generic_name', 'customer_name']
    ordering_fields = ['date', 'created_at', 'total_amount']
    ordering = ['-created_at']

    def get_queryset(self):
        return Sale.objects.all()

    def get_serializer_class(self):
        if self.action == 'create':
            return SaleCreateSerializer
        return SaleReadSerializer

    def create(self, request, *args, **kwargs):
        ser = SaleCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        service = SaleService(ProductRepository(), SaleLedger())
        sale = service.record_sale(
            product_id=ser.validated_data['product'],
            quantity=ser.validated_data['quantity'],
            customer_name=ser.validated_data['customer_name'],
            payment_method=ser.validated_data['payment_method'],
            actor=request.user,
        )
        return Response(SaleReadSerializer(sale).data, status=status.HTTP_201_CREATED)
