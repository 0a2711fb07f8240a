# apps/ecommerce/models/orders.py

"""
Orders, order items and order tracking events
"""

from decimal import Decimal

from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel
from apps.core.utils import generate_reference
from .managers import OrderQuerySet


def generate_tracking_number():
    return generate_reference(separator='')


class Order(TimeStampedModel):
    """A purchase from one store. A checkout spanning stores creates one order per store"""
    
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        PROCESSING = 'processing', 'Processing'
        SHIPPED = 'shipped', 'Shipped'
        DELIVERED = 'delivered', 'Delivered'
        CANCELLED = 'cancelled', 'Cancelled'
    
    class PaymentMethod(models.TextChoices):
        PAYSTACK = 'paystack', 'Paystack'
        FLUTTERWAVE = 'flutterwave', 'Flutterwave'
        WHATSAPP = 'whatsapp', 'WhatsApp'
    
    class PaymentStatus(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'
        FAILED = 'failed', 'Failed'
    
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='orders'
    )
    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='orders')
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    payment_reference = models.CharField(max_length=64, db_index=True)
    tracking_number = models.CharField(max_length=64, unique=True, default=generate_tracking_number)
    shipping_address = models.JSONField(default=dict)
    vendor_credited = models.BooleanField(default=False)
    
    objects = OrderQuerySet.as_manager()
    
    class Meta:
        ordering = ['-created_at']
    
    def __str__(self):
        return f"Order {self.tracking_number}"
    
    @property
    def is_paid(self):
        return self.payment_status == self.PaymentStatus.COMPLETED


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        'ecommerce.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    product_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    
    class Meta:
        ordering = ['id']
    
    def __str__(self):
        return f"{self.quantity} x {self.product_name}"
    
    @property
    def line_total(self):
        return self.price * self.quantity


class OrderTracking(models.Model):
    """A timeline event shown to the customer"""
    
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='tracking_events')
    status = models.CharField(max_length=100)
    location = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        ordering = ['created_at', 'id']
    
    def __str__(self):
        return f"{self.order}: {self.status}"
