# apps/ecommerce/models/cart.py

"""
Shopping cart: one cart per user, priced from live product prices
"""

from collections import OrderedDict
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.core.models import TimeStampedModel


class Cart(TimeStampedModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart'
    )
    
    def __str__(self):
        return f"Cart of {self.user}"
    
    def get_lines(self):
        return list(self.items.select_related('product', 'product__store').order_by('created_at', 'id'))
    
    @property
    def total_amount(self):
        return sum((item.line_total for item in self.get_lines()), Decimal('0.00'))
    
    @property
    def item_count(self):
        return sum(item.quantity for item in self.get_lines())
    
    def lines_by_store(self, lines=None):
        """Group cart lines by store, keeping first-seen order"""
        grouped = OrderedDict()
        for item in (lines if lines is not None else self.get_lines()):
            grouped.setdefault(item.product.store, []).append(item)
        return grouped


class CartItem(TimeStampedModel):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('ecommerce.Product', on_delete=models.CASCADE, related_name='cart_items')
    quantity = models.PositiveIntegerField(default=1)
    
    class Meta:
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['cart', 'product'], name='unique_cart_product'),
            models.CheckConstraint(condition=Q(quantity__gte=1), name='cart_item_quantity_positive'),
        ]
    
    def __str__(self):
        return f"{self.quantity} x {self.product}"
    
    @property
    def unit_price(self):
        return self.product.price
    
    @property
    def line_total(self):
        return self.product.price * self.quantity
