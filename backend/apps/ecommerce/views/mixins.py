"""
View mixins for the storefront API
"""

from rest_framework.response import Response

from ..serializers import CartSerializer
from ..services import CartService


class CartMixin:
    """Mixin for cart-related functionality"""
    
    def get_cart_service(self):
        return CartService(self.request.user)
    
    def cart_response(self, status=200, **extra):
        """Current cart, optionally with extra top-level keys"""
        cart = self.get_cart_service().get_cart()
        data = CartSerializer(cart, context={'request': self.request}).data
        return Response({**extra, 'cart': data}, status=status)
