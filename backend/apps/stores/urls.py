# apps/stores/urls.py

"""
URL configuration for stores, vendor upgrades and cashouts
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'stores'

router = DefaultRouter()
router.register('admin/stores', views.AdminStoreViewSet, basename='admin-store')
router.register('admin/upgrade-requests', views.AdminVendorUpgradeRequestViewSet, basename='admin-upgrade-request')
router.register('admin/cashouts', views.AdminCashoutRequestViewSet, basename='admin-cashout')
router.register('upgrade-requests', views.VendorUpgradeRequestViewSet, basename='upgrade-request')
router.register('cashouts', views.CashoutRequestViewSet, basename='cashout')
router.register('stores', views.StoreViewSet, basename='store')

urlpatterns = [
    path('', include(router.urls)),
]
