"""
Shopping cart service
Quantities are clamped to available stock; prices are read from the product
"""

from django.db import transaction

from apps.core.services import BaseService, ValidationError, NotFoundError
from ..exceptions import ProductNotAvailableException
from ..models import Cart, CartItem, Product


class CartService(BaseService):
    """Service for managing the signed-in user's cart"""

    def get_cart(self) -> Cart:
        """Get or create cart for the user"""
        cart, created = Cart.objects.get_or_create(user=self.user)
        if created:
            self.log_info(f"Created new cart for user {self.user.email}")
        return cart

    def _parse_quantity(self, quantity) -> int:
        try:
            return int(quantity)
        except (TypeError, ValueError):
            raise ValidationError("Quantity must be a whole number")

    def _get_item(self, item_id) -> CartItem:
        item = CartItem.objects.select_related('product').filter(pk=item_id, cart__user=self.user).first()
        if item is None:
            raise NotFoundError("Cart item not found")
        return item

    def add_item(self, product_id, quantity=1) -> CartItem:
        """
        Add a product, merging with an existing line.
        The resulting quantity never exceeds the product's stock.
        """
        quantity = self._parse_quantity(quantity)
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        product = Product.objects.active().filter(pk=product_id).first()
        if product is None:
            raise ProductNotAvailableException()
        if product.stock_quantity <= 0:
            raise ProductNotAvailableException("Product is out of stock")

        cart = self.get_cart()
        with transaction.atomic():
            item, created = CartItem.objects.select_for_update().get_or_create(
                cart=cart,
                product=product,
                defaults={'quantity': min(quantity, product.stock_quantity)}
            )
            if not created:
                item.quantity = min(item.quantity + quantity, product.stock_quantity)
                item.save(update_fields=['quantity', 'updated_at'])

        self.log_info(f"Cart now holds {item.quantity}x {product.name}", {'product_id': product.pk})
        return item

    def update_quantity(self, item_id, quantity):
        """Set a line's quantity. Zero or less removes the line; returns None then"""
        quantity = self._parse_quantity(quantity)
        item = self._get_item(item_id)

        quantity = min(quantity, item.product.stock_quantity)
        if quantity <= 0:
            item.delete()
            self.log_info(f"Removed {item.product.name} from cart")
            return None

        item.quantity = quantity
        item.save(update_fields=['quantity', 'updated_at'])
        return item

    def remove_item(self, item_id):
        item = self._get_item(item_id)
        item.delete()
        self.log_info(f"Removed {item.product.name} from cart")

    def clear(self):
        deleted, _ = CartItem.objects.filter(cart__user=self.user).delete()
        self.log_info("Cleared cart", {'deleted_items': deleted})
