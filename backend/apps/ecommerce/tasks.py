from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
import logging

from apps.core.utils import format_naira
from .models import Order

logger = logging.getLogger(__name__)


def _order_lines(order):
    return "\n".join(
        f"  - {item.product_name} x{item.quantity}: {format_naira(item.line_total)}"
        for item in order.items.all()
    )


@shared_task
def send_order_confirmation_email(order_id):
    """Tell the customer their order was placed"""
    try:
        order = Order.objects.select_related('customer', 'store').get(id=order_id)
    except Order.DoesNotExist:
        logger.error(f"Order {order_id} not found for confirmation email")
        return f"Order {order_id} not found"
    
    marketplace = settings.MARKETPLACE['NAME']
    send_mail(
        subject=f"{marketplace}: order {order.tracking_number} received",
        message=(
            f"Hello {order.customer.get_short_name()},\n\n"
            f"Thank you for shopping at {order.store.name} on {marketplace}.\n\n"
            f"Order: {order.tracking_number}\n"
            f"{_order_lines(order)}\n"
            f"Total: {format_naira(order.total_amount)}\n\n"
            f"Track your order at {settings.FRONTEND_URL}/orders/{order.pk}"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[order.customer.email],
        fail_silently=False
    )
    
    logger.info(f"Order confirmation sent for {order.tracking_number}")
    return f"Confirmation sent for order {order_id}"


@shared_task
def send_order_status_update_email(order_id):
    """Tell the customer their order moved to a new status"""
    try:
        order = Order.objects.select_related('customer').get(id=order_id)
    except Order.DoesNotExist:
        logger.error(f"Order {order_id} not found for status update email")
        return f"Order {order_id} not found"
    
    latest = order.tracking_events.order_by('-created_at', '-id').first()
    notes = f"\n{latest.notes}\n" if latest and latest.notes else ""
    
    send_mail(
        subject=f"Order {order.tracking_number} is now {order.get_status_display()}",
        message=(
            f"Hello {order.customer.get_short_name()},\n\n"
            f"Your order {order.tracking_number} is now {order.get_status_display().lower()}.\n"
            f"{notes}\n"
            f"Track your order at {settings.FRONTEND_URL}/orders/{order.pk}"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[order.customer.email],
        fail_silently=False
    )
    
    logger.info(f"Status update sent for {order.tracking_number} ({order.status})")
    return f"Status update sent for order {order_id}"


@shared_task
def cancel_stale_unpaid_orders(hours=None):
    """Expire provider payments that never completed, cancelling their orders"""
    from .services import PaymentService
    
    hours = hours or settings.MARKETPLACE['STALE_PAYMENT_HOURS']
    references = PaymentService().expire_stale(hours)
    
    logger.info(f"Stale payment cleanup completed: {len(references)} payments expired")
    return f"Expired {len(references)} stale payments"
