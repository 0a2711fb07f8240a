"""
Dashboard service
Read models for the customer, vendor and admin dashboards
"""

from decimal import Decimal
from typing import Dict

from django.contrib.auth import get_user_model
from django.db.models import Sum

from apps.core.services import BaseService, PermissionError
from apps.stores.models import Store, CashoutRequest
from ..constants import VENDOR_PENDING_STATUSES
from ..models import Category, Order, Product, Review

User = get_user_model()

CENTS = Decimal('0.01')


def money_total(queryset, field='total_amount'):
    """Sum of a money column at two decimal places, whatever scale the database returns"""
    total = queryset.aggregate(total=Sum(field))['total']
    return (total or Decimal('0')).quantize(CENTS)


class DashboardService(BaseService):

    def customer_dashboard(self) -> Dict:
        stores = Store.objects.filter(owner=self.user).order_by('-created_at') if self.user.is_vendor else Store.objects.none()
        return {
            'role': self.user.role,
            'orders': Order.objects.filter(customer=self.user).select_related('store').prefetch_related(
                'items'
            ).order_by('-created_at'),
            'stores': stores,
        }

    def vendor_dashboard(self) -> Dict:
        """Everything a vendor sees about their own stores"""
        if not self.user.is_vendor:
            raise PermissionError("Access denied. Vendor account required.")

        stores = Store.objects.filter(owner=self.user).order_by('-created_at')
        orders = Order.objects.filter(store__owner=self.user).select_related(
            'store', 'customer'
        ).prefetch_related('items').order_by('-created_at')

        revenue = money_total(orders.paid())

        self.user.refresh_from_db(fields=['available_balance'])
        return {
            'stores': stores,
            'orders': orders,
            'cashout_requests': CashoutRequest.objects.filter(vendor=self.user).order_by('-created_at'),
            'reviews': Review.objects.filter(product__store__owner=self.user).select_related(
                'product', 'customer'
            ).order_by('-created_at'),
            'summary': {
                'total_revenue': revenue,
                'pending_orders': orders.filter(status__in=VENDOR_PENDING_STATUSES).count(),
                'product_count': Product.objects.filter(store__owner=self.user).count(),
                'available_balance': self.user.available_balance.quantize(CENTS),
            },
        }

    def admin_dashboard(self) -> Dict:
        revenue = money_total(Order.objects.all())
        return {
            'categories': Category.objects.order_by('-created_at'),
            'total_products': Product.objects.count(),
            'total_orders': Order.objects.count(),
            'total_users': User.objects.count(),
            'total_revenue': revenue,
        }
