"""
Inventory — Views

DRF ViewSet for product records: CRUD, barcode lookup, category list
and stock intake.

@file inventory/views.py
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .filters import ProductFilter
from .repositories import ProductRepository
from .serializers import ProductSerializer, StockIntakeSerializer
from .services import ProductService


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product records with nested batches.

    Writes go through ProductService so current_stock is always derived
    from the submitted batches.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    search_fields = ['brand_name', 'generic_name']
    ordering_fields = ['brand_name', 'generic_name', 'current_stock', 'unit_price', 'created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return ProductRepository().queryset()

    def get_service(self) -> ProductService:
        return ProductService(ProductRepository())

    def perform_create(self, serializer):
        serializer.instance = self.get_service().create_product(
            actor=self.request.user, **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = self.get_service().update_product(
            product_id=self.get_object().pk,
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        self.get_service().delete_product(product_id=instance.pk, actor=self.request.user)

    @action(detail=False, methods=['get'], url_path=r'barcode/(?P<barcode>[^/]+)')
    def barcode(self, request, barcode=None):
        product = ProductRepository().get_by_barcode(barcode)
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=['get'], url_path='categories')
    def categories(self, request):
        return Response(ProductRepository().categories())

    @action(detail=True, methods=['post'], url_path='batches')
    def batches(self, request, pk=None):
        product = self.get_object()
        ser = StockIntakeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = self.get_service().receive_batches(
            product_id=product.pk,
            batches=ser.validated_data['batches'],
            actor=request.user,
        )
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)
