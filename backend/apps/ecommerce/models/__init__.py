# apps/ecommerce/models/__init__.py

"""
E-commerce models for the LuxePlus marketplace
"""

from .catalog import Category, Product, ProductImage, Review
from .cart import Cart, CartItem
from .orders import Order, OrderItem, OrderTracking
from .payments import PaymentTransaction

__all__ = [
    'Category', 'Product', 'ProductImage', 'Review',
    'Cart', 'CartItem',
    'Order', 'OrderItem', 'OrderTracking',
    'PaymentTransaction',
]
