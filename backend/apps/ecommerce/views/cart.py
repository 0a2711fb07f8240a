"""
Cart views
Every response carries the full cart so clients can re-render from it
"""

from rest_framework import status
from rest_framework.views import APIView

from ..serializers import AddToCartSerializer, UpdateCartItemSerializer
from .mixins import CartMixin


class CartView(CartMixin, APIView):
    """GET the signed-in user's cart; DELETE empties it"""
    
    def get(self, request):
        return self.cart_response()
    
    def delete(self, request):
        self.get_cart_service().clear()
        return self.cart_response(message='Cart cleared')


class CartItemListView(CartMixin, APIView):
    """Add a product to the cart"""
    
    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        self.get_cart_service().add_item(**serializer.validated_data)
        return self.cart_response(status=status.HTTP_201_CREATED, message='Added to cart')


class CartItemDetailView(CartMixin, APIView):
    """Change a line's quantity or remove it"""
    
    def patch(self, request, item_id):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        item = self.get_cart_service().update_quantity(item_id, serializer.validated_data['quantity'])
        message = 'Cart updated' if item is not None else 'Item removed from cart'
        return self.cart_response(message=message)
    
    def delete(self, request, item_id):
        self.get_cart_service().remove_item(item_id)
        return self.cart_response(message='Item removed from cart')
