import logging
from decimal import Decimal
from django.conf import settings

from ..constants import KOBO_PER_NAIRA
from .base import BaseWebhookView

logger = logging.getLogger(__name__)


class PaystackWebhookView(BaseWebhookView):
    """Handle Paystack webhooks"""
    
    provider = 'paystack'
    
    def verify_signature(self, request):
        secret_key = settings.PAYSTACK_SECRET_KEY
        if not secret_key:
            logger.error("Paystack webhook received but PAYSTACK_SECRET_KEY is not set")
            return False
        signature = request.headers.get('X-Paystack-Signature')
        return self.verify_hmac_signature(request.body, signature, secret_key)
    
    def process_webhook(self, payload):
        """Route events to appropriate handlers"""
        event_type = payload.get('event')
        
        handlers = {
            'charge.success': self.handle_charge_success,
        }
        
        handler = handlers.get(event_type)
        if handler:
            handler(payload.get('data') or {}, payload)
        else:
            logger.info(f"Unhandled Paystack event type: {event_type}")
    
    def handle_charge_success(self, data, payload):
        amount = data.get('amount')
        self.settle(
            data.get('reference'),
            success=True,
            amount=Decimal(amount) / KOBO_PER_NAIRA if amount is not None else None,
            payload=payload,
        )
