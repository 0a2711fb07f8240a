# apps/ecommerce/models/managers.py

"""
Custom querysets for catalog and order models
"""

from datetime import timedelta

from django.db import models
from django.db.models import Q
from django.utils import timezone


class ProductQuerySet(models.QuerySet):
    
    def active(self):
        """Listed products of listed stores"""
        return self.filter(is_active=True, store__is_active=True)
    
    def in_stock(self):
        return self.filter(stock_quantity__gt=0)
    
    def search(self, term):
        return self.filter(name__icontains=(term or '').strip())
    
    def newest(self):
        return self.order_by('-created_at', '-id')


class OrderQuerySet(models.QuerySet):
    
    def visible_to(self, user):
        """Customers see their orders, vendors their stores' orders, admins everything"""
        if user.is_platform_admin:
            return self
        return self.filter(Q(customer=user) | Q(store__owner=user))
    
    def for_reference(self, reference):
        return self.filter(payment_reference=reference)
    
    def paid(self):
        return self.filter(payment_status='completed')
    
    def stale_unpaid(self, hours):
        """Provider-paid orders still awaiting payment after `hours`"""
        cutoff = timezone.now() - timedelta(hours=hours)
        return self.filter(
            payment_status='pending',
            payment_method__in=['paystack', 'flutterwave'],
            status='pending',
            created_at__lt=cutoff,
        )
