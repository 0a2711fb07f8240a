# apps/ecommerce/constants.py

"""
Constants for the storefront: order state machine and tracking labels
"""

from .models import Order

# Allowed order status transitions
ORDER_STATUS_TRANSITIONS = {
    Order.Status.PENDING: [Order.Status.CONFIRMED, Order.Status.CANCELLED],
    Order.Status.CONFIRMED: [Order.Status.PROCESSING, Order.Status.CANCELLED],
    Order.Status.PROCESSING: [Order.Status.SHIPPED],
    Order.Status.SHIPPED: [Order.Status.DELIVERED],
    Order.Status.DELIVERED: [],
    Order.Status.CANCELLED: [],
}

# Order statuses counted as pending on the vendor dashboard
VENDOR_PENDING_STATUSES = [Order.Status.PENDING, Order.Status.CONFIRMED]

# Tracking events
TRACKING_ORDER_PLACED = 'Order Placed'
TRACKING_ORDER_PLACED_NOTES = 'Your order has been received and is being processed'
TRACKING_PAYMENT_CONFIRMED = 'Payment Confirmed'
TRACKING_PAYMENT_CONFIRMED_NOTES = 'Your payment has been received'
TRACKING_PAYMENT_FAILED = 'Payment Failed'
TRACKING_PAYMENT_FAILED_NOTES = 'Payment was not completed'
TRACKING_PAYMENT_FAILED_CANCELLED_NOTES = 'Order cancelled because payment failed'
TRACKING_STALE_CANCELLED_NOTES = 'Order cancelled because payment was not completed in time'

# Flutterwave hosted checkout
FLUTTERWAVE_PAYMENT_OPTIONS = 'card,banktransfer,ussd'
FLUTTERWAVE_DESCRIPTION = 'Payment for order'

# Paystack amounts are sent in kobo
KOBO_PER_NAIRA = 100
