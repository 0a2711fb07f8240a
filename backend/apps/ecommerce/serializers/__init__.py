"""
Serializers for the e-commerce module
"""

from .catalog import (
    CategorySerializer, ProductImageSerializer, ProductSerializer,
    ProductDetailSerializer, ProductActiveSerializer, ReviewSerializer,
)
from .cart import CartItemSerializer, CartSerializer, AddToCartSerializer, UpdateCartItemSerializer
from .orders import (
    OrderItemSerializer, OrderTrackingSerializer, OrderSerializer, OrderDetailSerializer,
    OrderStatusUpdateSerializer, ShippingAddressSerializer, CheckoutSerializer,
    PaymentTransactionSerializer, VerifyPaymentSerializer,
)

__all__ = [
    'CategorySerializer', 'ProductImageSerializer', 'ProductSerializer',
    'ProductDetailSerializer', 'ProductActiveSerializer', 'ReviewSerializer',
    'CartItemSerializer', 'CartSerializer', 'AddToCartSerializer', 'UpdateCartItemSerializer',
    'OrderItemSerializer', 'OrderTrackingSerializer', 'OrderSerializer', 'OrderDetailSerializer',
    'OrderStatusUpdateSerializer', 'ShippingAddressSerializer', 'CheckoutSerializer',
    'PaymentTransactionSerializer', 'VerifyPaymentSerializer',
]
