"""
Analytics — Views

GET /alerts/ and GET /dashboard/.

@file analytics/views.py
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from inventory.repositories import ProductRepository
from sales.repositories import SaleLedger

from .serializers import AlertQuerySerializer, AlertReportSerializer, DashboardSerializer
from .services import InsightsService


def _insights() -> InsightsService:
    return InsightsService(ProductRepository(), SaleLedger())


class AlertsView(APIView):
    """Low-stock and expiry alerts, optionally evaluated as of ?as_of=YYYY-MM-DD."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = AlertQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        report = _insights().get_alerts(as_of=query.validated_data.get('as_of'))
        return Response(AlertReportSerializer(report).data)


class DashboardView(APIView):
    """Inventory value, risk counts and recent sales."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        metrics = _insights().get_dashboard()
        return Response(DashboardSerializer(metrics).data)
