# apps/ecommerce/urls.py

"""
URL configuration for e-commerce module
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views
from .webhooks.flutterwave import FlutterwaveWebhookView
from .webhooks.paystack import PaystackWebhookView

app_name = 'ecommerce'

# API Router for DRF ViewSets
router = DefaultRouter()
router.register('categories', views.CategoryViewSet, basename='categories')
router.register('products', views.ProductViewSet, basename='products')
router.register('orders', views.OrderViewSet, basename='orders')
router.register('admin/products', views.AdminProductViewSet, basename='admin-products')

urlpatterns = [
    # Storefront
    path('home/', views.HomeFeedView.as_view(), name='home'),
    path('search/', views.SearchView.as_view(), name='search'),
    
    # Cart
    path('cart/', views.CartView.as_view(), name='cart'),
    path('cart/items/', views.CartItemListView.as_view(), name='cart-items'),
    path('cart/items/<int:item_id>/', views.CartItemDetailView.as_view(), name='cart-item-detail'),
    
    # Checkout and payments
    path('checkout/', views.CheckoutView.as_view(), name='checkout'),
    path('payments/verify/', views.VerifyPaymentView.as_view(), name='payment-verify'),
    path('payments/<str:reference>/', views.PaymentDetailView.as_view(), name='payment-detail'),
    path(
        'admin/payments/<str:reference>/confirm-whatsapp/',
        views.AdminConfirmWhatsAppPaymentView.as_view(),
        name='admin-confirm-whatsapp-payment'
    ),
    
    # Dashboards
    path('dashboard/', views.CustomerDashboardView.as_view(), name='customer-dashboard'),
    path('dashboard/vendor/', views.VendorDashboardView.as_view(), name='vendor-dashboard'),
    path('dashboard/admin/', views.AdminDashboardView.as_view(), name='admin-dashboard'),
    
    # Webhook endpoints
    path('webhooks/paystack/', PaystackWebhookView.as_view(), name='paystack-webhook'),
    path('webhooks/flutterwave/', FlutterwaveWebhookView.as_view(), name='flutterwave-webhook'),
    
    path('', include(router.urls)),
]
