# apps/stores/models.py

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.core.models import TimeStampedModel
from apps.core.utils import RandomUploadPath


class StoreQuerySet(models.QuerySet):
    
    def active(self):
        return self.filter(is_active=True)
    
    def by_name(self, name):
        return self.filter(name__iexact=(name or '').strip())


class Store(TimeStampedModel):
    """A vendor-owned catalog of products"""
    
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='stores'
    )
    name = models.CharField(max_length=150, db_index=True)
    description = models.TextField(blank=True)
    logo = models.ImageField(upload_to=RandomUploadPath('store-logos'), null=True, blank=True)
    banner = models.ImageField(upload_to=RandomUploadPath('store-banners'), null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    
    objects = StoreQuerySet.as_manager()
    
    class Meta:
        ordering = ['-created_at']
    
    def __str__(self):
        return self.name


class VendorUpgradeRequest(TimeStampedModel):
    """Customer-initiated request to become a vendor"""
    
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'
    
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='vendor_upgrade_requests'
    )
    phone = models.CharField(max_length=20)
    bvn = models.CharField(max_length=11)
    account_number = models.CharField(max_length=10)
    account_name = models.CharField(max_length=150)
    bank_name = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    admin_notes = models.TextField(blank=True)
    
    class Meta:
        ordering = ['-created_at']
    
    def __str__(self):
        return f"Upgrade request by {self.user} ({self.status})"


class CashoutRequest(TimeStampedModel):
    """Vendor withdrawal of accumulated balance"""
    
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'
        REJECTED = 'rejected', 'Rejected'
    
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cashout_requests'
    )
    amount = models.DecimalField(
        max_digits=14, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    admin_notes = models.TextField(blank=True)
    
    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name='cashout_amount_positive'),
        ]
    
    def __str__(self):
        return f"Cashout {self.amount} by {self.vendor} ({self.status})"
