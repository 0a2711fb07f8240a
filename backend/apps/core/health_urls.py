# backend/apps/core/health_urls.py - System Health URLs
from django.urls import path
from . import views

app_name = 'health'

urlpatterns = [
    path('', views.health_check, name='health-check'),
    path('cache/', views.cache_health, name='cache-health'),
]
