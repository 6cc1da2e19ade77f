"""
Analytics — URL Configuration

@file analytics/urls.py
"""

from django.urls import path

from .views import AlertsView, DashboardView

app_name = 'analytics'

urlpatterns = [
    path('alerts/', AlertsView.as_view(), name='alerts'),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
]
