"""
Services for the e-commerce module.
Business logic layer for catalog, cart, checkout, orders, payments and dashboards.
"""

from .catalog import CatalogService
from .cart import CartService
from .order import OrderService
from .payment import PaymentService
from .checkout import CheckoutService
from .dashboard import DashboardService

__all__ = [
    'CatalogService', 'CartService', 'OrderService',
    'PaymentService', 'CheckoutService', 'DashboardService',
]
