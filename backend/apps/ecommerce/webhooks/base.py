import json
import hmac
import hashlib
import logging
from decimal import Decimal
from django.http import HttpResponse
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from django.utils.decorators import method_decorator

from apps.core.services import NotFoundError
from ..models import PaymentTransaction
from ..services import PaymentService

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name='dispatch')
class BaseWebhookView(View):
    """Base webhook view for payment gateways"""
    
    provider = None
    
    def post(self, request, *args, **kwargs):
        """Handle webhook POST request"""
        # Verify webhook signature
        if not self.verify_signature(request):
            logger.warning(f"Invalid webhook signature from {self.__class__.__name__}")
            return HttpResponse(status=400)
        
        # Parse webhook payload
        payload = self.parse_payload(request)
        if payload is None:
            return HttpResponse(status=400)
        
        try:
            self.process_webhook(payload)
        except Exception:
            logger.exception(f"{self.provider} webhook processing error")
            return HttpResponse(status=500)
        
        return HttpResponse(status=200)
    
    def verify_signature(self, request):
        """Verify webhook signature - to be implemented by subclasses"""
        raise NotImplementedError("Subclasses must implement verify_signature")
    
    def parse_payload(self, request):
        """Parse webhook payload"""
        try:
            payload = json.loads(request.body.decode('utf-8'))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.error("Invalid JSON in webhook payload")
            return None
        return payload if isinstance(payload, dict) else None
    
    def process_webhook(self, payload):
        """Process webhook event - to be implemented by subclasses"""
        raise NotImplementedError("Subclasses must implement process_webhook")
    
    def create_signature(self, payload, secret):
        """Create HMAC-SHA512 signature for payload"""
        return hmac.new(
            secret.encode('utf-8'),
            payload,
            hashlib.sha512
        ).hexdigest()
    
    def verify_hmac_signature(self, payload, signature, secret):
        """Verify HMAC signature"""
        expected_signature = self.create_signature(payload, secret)
        return hmac.compare_digest(signature or '', expected_signature)
    
    def settle(self, reference, success, amount, payload):
        """
        Settle a payment named by a webhook. Unknown references are acknowledged
        and logged; amounts short of the payment total are not settled as paid.
        """
        payment = PaymentTransaction.objects.filter(reference=reference, provider=self.provider).first()
        if payment is None:
            logger.warning(f"{self.provider} webhook for unknown reference {reference}")
            return None
        
        if success and (amount is None or Decimal(str(amount)) < payment.amount):
            logger.warning(
                f"{self.provider} webhook amount {amount} does not cover payment {reference} ({payment.amount})"
            )
            return None
        
        try:
            return PaymentService().settle(reference, success=success, provider_response=payload)
        except NotFoundError:
            logger.warning(f"{self.provider} payment {reference} disappeared before settlement")
            return None
