"""
Payment service
Starts hosted payments, verifies them with the provider and settles every
order that shares the payment reference
"""

from typing import List, Optional

from django.conf import settings
from django.db import transaction

from apps.core.services import BaseService, ValidationError, NotFoundError
from ..constants import (
    TRACKING_PAYMENT_CONFIRMED, TRACKING_PAYMENT_CONFIRMED_NOTES,
    TRACKING_PAYMENT_FAILED, TRACKING_PAYMENT_FAILED_NOTES, TRACKING_PAYMENT_FAILED_CANCELLED_NOTES,
    TRACKING_STALE_CANCELLED_NOTES,
)
from ..exceptions import PaymentProcessingException
from ..gateways import build_whatsapp_payment_url, get_gateway
from ..models import Order, OrderTracking, PaymentTransaction
from .order import OrderService


class PaymentService(BaseService):
    """Service for payment initiation, verification and settlement"""

    def callback_url(self, reference: str) -> str:
        return f"{settings.FRONTEND_URL}/payment/callback?reference={reference}"

    def get_transaction(self, reference: str) -> PaymentTransaction:
        """Transaction by reference, restricted to its customer unless the caller is an admin"""
        queryset = PaymentTransaction.objects.filter(reference=reference)
        if self.user is not None and not self.user.is_platform_admin:
            queryset = queryset.filter(customer=self.user)
        payment = queryset.first()
        if payment is None:
            raise NotFoundError("Payment not found", details={'reference': reference})
        return payment

    def initiate(self, payment: PaymentTransaction) -> PaymentTransaction:
        """Obtain the URL the customer should be sent to"""
        if payment.provider == Order.PaymentMethod.WHATSAPP:
            payment.authorization_url = build_whatsapp_payment_url(payment.reference, payment.amount)
            payment.save(update_fields=['authorization_url', 'updated_at'])
            self.log_info("WhatsApp payment link issued", {'reference': payment.reference})
            return payment

        gateway = get_gateway(payment.provider)
        try:
            initialization = gateway.initialize(
                reference=payment.reference,
                amount=payment.amount,
                email=payment.customer.email,
                callback_url=self.callback_url(payment.reference),
                customer_name=payment.customer.full_name,
            )
        except PaymentProcessingException as e:
            self.log_error(f"Could not start {payment.provider} payment", e, {'reference': payment.reference})
            raise

        payment.authorization_url = initialization.authorization_url
        payment.provider_response = initialization.raw
        payment.save(update_fields=['authorization_url', 'provider_response', 'updated_at'])
        self.log_info(f"{payment.provider} payment initialized", {'reference': payment.reference})
        return payment

    def verify(self, reference: str) -> PaymentTransaction:
        """
        Ask the provider about a payment and settle it when the provider has a final answer.
        Already-settled payments are returned unchanged.
        """
        payment = self.get_transaction(reference)
        if payment.status != PaymentTransaction.Status.PENDING:
            return payment
        if payment.provider == Order.PaymentMethod.WHATSAPP:
            raise ValidationError("WhatsApp payments are confirmed manually by an admin")

        verification = get_gateway(payment.provider).verify(reference)

        if verification.paid:
            if verification.amount is None or verification.amount < payment.amount:
                self.log_warning("Provider amount does not cover the payment", {
                    'reference': reference,
                    'expected': str(payment.amount),
                    'received': str(verification.amount),
                })
                raise PaymentProcessingException("Payment amount does not match order total")
            return self.settle(reference, success=True, provider_response=verification.raw)

        if verification.failed:
            return self.settle(reference, success=False, provider_response=verification.raw)

        self.log_info("Payment not completed yet", {'reference': reference})
        return payment

    def settle(self, reference: str, success: bool, provider_response: Optional[dict] = None,
               cancel_notes: str = TRACKING_PAYMENT_FAILED_CANCELLED_NOTES) -> PaymentTransaction:
        """
        Record the final outcome of a payment. Idempotent: a payment that is no
        longer pending is returned untouched.
        """
        with transaction.atomic():
            payment = PaymentTransaction.objects.select_for_update().filter(reference=reference).first()
            if payment is None:
                raise NotFoundError("Payment not found", details={'reference': reference})
            if payment.status != PaymentTransaction.Status.PENDING:
                self.log_info("Payment already settled", {'reference': reference, 'status': payment.status})
                return payment

            payment.status = (
                PaymentTransaction.Status.COMPLETED if success else PaymentTransaction.Status.FAILED
            )
            if provider_response is not None:
                payment.provider_response = provider_response
            payment.save(update_fields=['status', 'provider_response', 'updated_at'])

            orders = Order.objects.select_for_update().select_related('store').for_reference(reference)
            order_service = OrderService(self.user)
            for order in orders:
                if success:
                    order.payment_status = Order.PaymentStatus.COMPLETED
                    order.save(update_fields=['payment_status', 'updated_at'])
                    if order.status == Order.Status.CANCELLED:
                        # Customer was charged for an order that no longer ships
                        self.log_warning(f"Payment received for cancelled order {order.tracking_number}", {
                            'reference': reference,
                            'order_id': order.pk,
                            'amount': str(order.total_amount),
                        })
                        continue
                    OrderTracking.objects.create(
                        order=order,
                        status=TRACKING_PAYMENT_CONFIRMED,
                        notes=TRACKING_PAYMENT_CONFIRMED_NOTES,
                    )
                    order_service.credit_vendor(order)
                else:
                    order.payment_status = Order.PaymentStatus.FAILED
                    order.save(update_fields=['payment_status', 'updated_at'])
                    OrderTracking.objects.create(
                        order=order,
                        status=TRACKING_PAYMENT_FAILED,
                        notes=TRACKING_PAYMENT_FAILED_NOTES,
                    )
                    order_service.cancel_unpaid(order, cancel_notes)

        self.log_info(f"Payment {reference} settled as {payment.status}", {'orders': len(orders)})
        return payment

    def mark_whatsapp_paid(self, reference: str) -> PaymentTransaction:
        """Admin confirmation of a payment made over WhatsApp"""
        payment = self.get_transaction(reference)
        if payment.provider != Order.PaymentMethod.WHATSAPP:
            raise ValidationError("Only WhatsApp payments can be confirmed manually")

        payment = self.settle(reference, success=True, provider_response={'confirmed_by': self.user.email})
        self.create_audit_log('confirm_whatsapp_payment', 'payment', reference)
        return payment

    def stale_references(self, hours: int) -> List[str]:
        """References of provider payments still pending after `hours`"""
        return list(
            Order.objects.stale_unpaid(hours).order_by().values_list('payment_reference', flat=True).distinct()
        )

    def expire_stale(self, hours: int, dry_run: bool = False) -> List[str]:
        """Fail stale provider payments, cancelling their orders and restoring stock"""
        references = self.stale_references(hours)
        if dry_run:
            self.log_info(f"{len(references)} stale payment(s) would be expired", {'hours': hours})
            return references

        for reference in references:
            self.settle(
                reference,
                success=False,
                provider_response={'reason': 'expired', 'hours': hours},
                cancel_notes=TRACKING_STALE_CANCELLED_NOTES,
            )
        self.log_info(f"Expired {len(references)} stale payment(s)", {'hours': hours})
        return references
