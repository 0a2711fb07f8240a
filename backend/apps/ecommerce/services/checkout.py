"""
Checkout service
Turns the cart into one order per store under a single payment reference
"""

from collections import OrderedDict
from decimal import Decimal
from typing import Dict

from django.conf import settings
from django.db import transaction
from django.db.models import F

from apps.core.services import BaseService
from apps.core.utils import generate_reference
from ..constants import TRACKING_ORDER_PLACED, TRACKING_ORDER_PLACED_NOTES
from ..exceptions import (
    CheckoutValidationException, InsufficientStockException, ProductNotAvailableException,
)
from ..gateways import get_gateway
from ..models import CartItem, Order, OrderItem, OrderTracking, PaymentTransaction, Product
from .payment import PaymentService

SHIPPING_REQUIRED_FIELDS = ['address', 'city', 'state']
SHIPPING_FIELDS = ['full_name', 'phone', 'address', 'city', 'state']


class CheckoutService(BaseService):
    """Service for placing orders from the signed-in user's cart"""

    def build_shipping_address(self, shipping: Dict) -> Dict:
        """Validated shipping snapshot; name and phone fall back to the profile"""
        shipping = {field: self.sanitize_string(shipping.get(field) or '') for field in SHIPPING_FIELDS}
        if any(not shipping[field] for field in SHIPPING_REQUIRED_FIELDS):
            raise CheckoutValidationException("Please fill in all shipping details")

        shipping['full_name'] = shipping['full_name'] or self.user.full_name
        shipping['phone'] = shipping['phone'] or self.user.phone
        return shipping

    def validate(self, shipping: Dict, payment_method: str) -> Dict:
        if payment_method not in Order.PaymentMethod.values:
            raise CheckoutValidationException(f"Unsupported payment method '{payment_method}'")
        if not self.user.email:
            raise CheckoutValidationException("Email is required for payment processing")
        if payment_method != Order.PaymentMethod.WHATSAPP:
            # Raises PaymentProcessingException when the provider has no credentials
            get_gateway(payment_method)
        return self.build_shipping_address(shipping)

    def checkout(self, shipping: Dict, payment_method: str) -> Dict:
        """
        Place the orders and start payment.

        Orders, items, tracking events, stock decrements and the payment record
        are written in one transaction. Payment initiation happens after commit,
        so a provider failure leaves the orders pending for a later retry.
        """
        shipping_address = self.validate(shipping, payment_method)

        try:
            payment, orders = self._place_orders(shipping_address, payment_method)
        except (CheckoutValidationException, ProductNotAvailableException, InsufficientStockException) as e:
            self.log_warning(f"Checkout rejected: {e.detail}")
            raise

        payment = PaymentService(self.user).initiate(payment)

        return {
            'reference': payment.reference,
            'payment_method': payment_method,
            'authorization_url': payment.authorization_url,
            'total_amount': payment.amount,
            'orders': orders,
        }

    @transaction.atomic
    def _place_orders(self, shipping_address: Dict, payment_method: str):
        lines = list(
            CartItem.objects.filter(cart__user=self.user).select_related('product').order_by('created_at', 'id')
        )
        if not lines:
            raise CheckoutValidationException("Your cart is empty")

        product_ids = [line.product_id for line in lines]
        products = {
            product.pk: product
            for product in Product.objects.select_for_update().filter(pk__in=product_ids).select_related('store')
        }

        by_store = OrderedDict()
        for line in lines:
            product = products[line.product_id]
            if not product.is_active or not product.store.is_active:
                raise ProductNotAvailableException(f"{product.name} is no longer available")
            if product.stock_quantity < line.quantity:
                raise InsufficientStockException(product.name, product.stock_quantity, line.quantity)
            by_store.setdefault(product.store_id, []).append((product, line.quantity))

        reference = generate_reference()
        orders = []
        grand_total = Decimal('0.00')

        for store_id, store_lines in by_store.items():
            total = sum((product.price * quantity for product, quantity in store_lines), Decimal('0.00'))
            order = Order.objects.create(
                customer=self.user,
                store_id=store_id,
                total_amount=total,
                payment_method=payment_method,
                payment_reference=reference,
                shipping_address=shipping_address,
            )
            OrderItem.objects.bulk_create([
                OrderItem(
                    order=order,
                    product=product,
                    product_name=product.name,
                    quantity=quantity,
                    price=product.price,
                )
                for product, quantity in store_lines
            ])
            OrderTracking.objects.create(
                order=order,
                status=TRACKING_ORDER_PLACED,
                notes=TRACKING_ORDER_PLACED_NOTES,
            )

            for product, quantity in store_lines:
                updated = Product.objects.filter(pk=product.pk, stock_quantity__gte=quantity).update(
                    stock_quantity=F('stock_quantity') - quantity
                )
                if not updated:
                    raise InsufficientStockException(product.name, product.stock_quantity, quantity)

            orders.append(order)
            grand_total += total

        payment = PaymentTransaction.objects.create(
            reference=reference,
            provider=payment_method,
            customer=self.user,
            amount=grand_total,
            currency=settings.MARKETPLACE['CURRENCY'],
        )

        CartItem.objects.filter(cart__user=self.user).delete()

        self.log_info(f"Placed {len(orders)} order(s) under {reference}", {
            'reference': reference,
            'total_amount': str(grand_total),
            'payment_method': payment_method,
        })
        return payment, orders
