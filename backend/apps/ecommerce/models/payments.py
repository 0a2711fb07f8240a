# apps/ecommerce/models/payments.py

"""
Payment transactions: one per checkout, shared by its orders through the reference
"""

from decimal import Decimal

from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel
from .orders import Order


class PaymentTransaction(TimeStampedModel):
    
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'
        FAILED = 'failed', 'Failed'
    
    reference = models.CharField(max_length=64, unique=True)
    provider = models.CharField(max_length=20)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='payment_transactions'
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    currency = models.CharField(max_length=3, default='NGN')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    provider_response = models.JSONField(default=dict, blank=True)
    authorization_url = models.URLField(max_length=500, blank=True)
    
    class Meta:
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.provider} payment {self.reference} ({self.status})"
    
    @property
    def orders(self):
        return Order.objects.filter(payment_reference=self.reference)
