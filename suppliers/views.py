"""
Suppliers — Views

@file suppliers/views.py
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .models import Supplier
from .serializers import SupplierSerializer


class SupplierViewSet(viewsets.ModelViewSet):
    """CRUD for the supplier directory."""

    permission_classes = [IsAuthenticated]
    serializer_class = SupplierSerializer
    filterset_fields = ['city', 'country']
    search_fields = ['name', 'contact_person', 'city']
    ordering_fields = ['name', 'last_delivery_date', 'created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return Supplier.objects.all()

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def perform_update(self, serializer):
        serializer.save(updated_by=self.request.user)
