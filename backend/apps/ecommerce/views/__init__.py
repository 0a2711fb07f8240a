"""
Views for the e-commerce module
"""

from .catalog import HomeFeedView, SearchView, CategoryViewSet, ProductViewSet, AdminProductViewSet
from .cart import CartView, CartItemListView, CartItemDetailView
from .checkout import CheckoutView, VerifyPaymentView, PaymentDetailView, AdminConfirmWhatsAppPaymentView
from .orders import OrderViewSet
from .dashboards import CustomerDashboardView, VendorDashboardView, AdminDashboardView

__all__ = [
    'HomeFeedView', 'SearchView', 'CategoryViewSet', 'ProductViewSet', 'AdminProductViewSet',
    'CartView', 'CartItemListView', 'CartItemDetailView',
    'CheckoutView', 'VerifyPaymentView', 'PaymentDetailView', 'AdminConfirmWhatsAppPaymentView',
    'OrderViewSet',
    'CustomerDashboardView', 'VendorDashboardView', 'AdminDashboardView',
]
