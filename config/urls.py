"""
PharmaLedger — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import (
    TokenBlacklistView,
    TokenObtainPairView,
    TokenRefreshView,
)

admin.site.site_header = 'PharmaLedger Administration'
admin.site.site_title = 'PharmaLedger'
admin.site.index_title = 'Pharmacy Inventory & Sales'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """PharmaLedger API v1 — endpoint directory."""
    return Response({
        'auth': {
            'login': reverse('api-v1:auth:login', request=request, format=format),
            'refresh': reverse('api-v1:auth:token-refresh', request=request, format=format),
            'logout': reverse('api-v1:auth:logout', request=request, format=format),
        },
        'inventory': {
            'list': reverse('api-v1:inventory:product-list', request=request, format=format),
            'categories': reverse('api-v1:inventory:product-categories', request=request, format=format),
        },
        'sales': reverse('api-v1:sales:sale-list', request=request, format=format),
        'alerts': reverse('api-v1:analytics:alerts', request=request, format=format),
        'dashboard': reverse('api-v1:analytics:dashboard', request=request, format=format),
        'suppliers': reverse('api-v1:suppliers:supplier-list', request=request, format=format),
    })


auth_patterns = [
    path('login/', TokenObtainPairView.as_view(), name='login'),
    path('refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('logout/', TokenBlacklistView.as_view(), name='logout'),
]

api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include((auth_patterns, 'auth'))),
    path('inventory/', include('inventory.urls', namespace='inventory')),
    path('sales/', include('sales.urls', namespace='sales')),
    path('suppliers/', include('suppliers.urls', namespace='suppliers')),
    path('', include('analytics.urls', namespace='analytics')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
