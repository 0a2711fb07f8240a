import hmac
import logging
from django.conf import settings

from .base import BaseWebhookView

logger = logging.getLogger(__name__)


class FlutterwaveWebhookView(BaseWebhookView):
    """Handle Flutterwave webhooks"""
    
    provider = 'flutterwave'
    
    def verify_signature(self, request):
        """Flutterwave echoes the configured secret hash in the verif-hash header"""
        signature = request.headers.get('Verif-Hash') or ''
        secret_hash = settings.FLUTTERWAVE_SECRET_HASH
        return bool(secret_hash) and hmac.compare_digest(signature, secret_hash)
    
    def process_webhook(self, payload):
        event_type = payload.get('event')
        
        handlers = {
            'charge.completed': self.handle_charge_completed,
        }
        
        handler = handlers.get(event_type)
        if handler:
            handler(payload.get('data') or {}, payload)
        else:
            logger.info(f"Unhandled Flutterwave event type: {event_type}")
    
    def handle_charge_completed(self, data, payload):
        status = data.get('status')
        if status not in ('successful', 'failed'):
            logger.info(f"Flutterwave charge {data.get('tx_ref')} is {status}; waiting for a final status")
            return
        
        self.settle(
            data.get('tx_ref'),
            success=status == 'successful',
            amount=data.get('amount'),
            payload=payload,
        )
