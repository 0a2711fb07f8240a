"""
Order service
Order status state machine, stock restoration and vendor balance credit
"""

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F

from apps.core.services import BaseService, PermissionError
from ..constants import ORDER_STATUS_TRANSITIONS
from ..exceptions import InvalidStatusTransitionException, OrderNotFoundException
from ..models import Order, OrderTracking, Product

User = get_user_model()


class OrderService(BaseService):
    """Service for reading and fulfilling orders"""

    def visible_orders(self):
        return Order.objects.visible_to(self.user).select_related(
            'store', 'customer'
        ).prefetch_related('items').order_by('-created_at')

    def get_order(self, order_id) -> Order:
        order = self.visible_orders().filter(pk=order_id).first()
        if order is None:
            raise OrderNotFoundException()
        return order

    def get_tracking(self, order: Order):
        """Tracking events, oldest first"""
        return order.tracking_events.order_by('created_at', 'id')

    def can_manage(self, order: Order) -> bool:
        return self.user.is_platform_admin or order.store.owner_id == self.user.pk

    @staticmethod
    def is_valid_transition(current: str, new: str) -> bool:
        return new in ORDER_STATUS_TRANSITIONS.get(current, [])

    def update_status(self, order: Order, new_status: str, location: str = '', notes: str = '') -> Order:
        """Move an order along the state machine and append a tracking event"""
        if not self.can_manage(order):
            raise PermissionError("Only the store owner or an admin can update this order")

        with transaction.atomic():
            order = Order.objects.select_for_update().select_related('store').get(pk=order.pk)
            if not self.is_valid_transition(order.status, new_status):
                raise InvalidStatusTransitionException(
                    f"Invalid status transition from {order.status} to {new_status}"
                )

            previous = order.status
            order.status = new_status
            order.save(update_fields=['status', 'updated_at'])

            OrderTracking.objects.create(
                order=order,
                status=order.get_status_display(),
                location=location or '',
                notes=notes or f"Order status updated to {new_status}",
            )

            if new_status == Order.Status.CANCELLED:
                self.restock(order)
            elif new_status == Order.Status.DELIVERED:
                self.credit_vendor(order)

        self.log_info(f"Order {order.tracking_number} moved {previous} -> {new_status}", {
            'order_id': order.pk
        })
        return order

    def restock(self, order: Order):
        """Put every item whose product still exists back into stock"""
        for item in order.items.all():
            if item.product_id is None:
                continue
            Product.objects.filter(pk=item.product_id).update(
                stock_quantity=F('stock_quantity') + item.quantity
            )
        self.log_info(f"Restocked items of order {order.tracking_number}", {'order_id': order.pk})

    def credit_vendor(self, order: Order) -> bool:
        """
        Credit the store owner with the order total once the order is both
        delivered and paid. Must run inside a transaction holding the order row.
        """
        if order.vendor_credited:
            return False
        if order.status != Order.Status.DELIVERED or not order.is_paid:
            return False

        User.objects.filter(pk=order.store.owner_id).update(
            available_balance=F('available_balance') + order.total_amount
        )
        order.vendor_credited = True
        order.save(update_fields=['vendor_credited', 'updated_at'])

        self.log_info(f"Credited {order.total_amount} to store owner for order {order.tracking_number}", {
            'order_id': order.pk,
            'store_id': order.store_id,
        })
        return True

    def cancel_unpaid(self, order: Order, notes: str) -> Order:
        """
        Cancel an order whose payment failed or never arrived.
        Bypasses the ownership check; callers are payment settlement and maintenance.
        """
        if order.status not in (Order.Status.PENDING, Order.Status.CONFIRMED):
            return order

        order.status = Order.Status.CANCELLED
        order.save(update_fields=['status', 'updated_at'])
        OrderTracking.objects.create(order=order, status=order.get_status_display(), notes=notes)
        self.restock(order)
        return order
