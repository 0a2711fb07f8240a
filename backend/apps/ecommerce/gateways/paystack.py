# apps/ecommerce/gateways/paystack.py

from decimal import Decimal

from django.conf import settings

from ..constants import KOBO_PER_NAIRA
from ..exceptions import PaymentProcessingException
from .base import BasePaymentGateway, PaymentInitialization, PaymentVerification


class PaystackGateway(BasePaymentGateway):
    """Paystack transaction API client"""
    
    name = 'paystack'
    
    def __init__(self, secret_key=None, base_url=None, timeout=None):
        super().__init__(
            secret_key or settings.PAYSTACK_SECRET_KEY,
            base_url or settings.PAYSTACK_BASE_URL,
            timeout
        )
    
    def initialize(self, reference, amount, email, callback_url, customer_name=''):
        payload = {
            'email': email,
            'amount': int(Decimal(amount) * KOBO_PER_NAIRA),
            'reference': reference,
            'currency': settings.MARKETPLACE['CURRENCY'],
            'callback_url': callback_url,
        }
        body = self._request('POST', '/transaction/initialize', json=payload)
        
        data = body.get('data') or {}
        if not body.get('status') or not data.get('authorization_url'):
            raise PaymentProcessingException(body.get('message') or 'Could not start Paystack payment')
        
        return PaymentInitialization(
            provider=self.name,
            reference=reference,
            authorization_url=data['authorization_url'],
            raw=body,
        )
    
    def verify(self, reference):
        body = self._request('GET', f'/transaction/verify/{reference}')
        data = body.get('data') or {}
        
        amount = data.get('amount')
        return PaymentVerification(
            provider=self.name,
            reference=reference,
            paid=bool(body.get('status')) and data.get('status') == 'success',
            failed=data.get('status') == 'failed',
            amount=Decimal(amount) / KOBO_PER_NAIRA if amount is not None else None,
            currency=data.get('currency') or settings.MARKETPLACE['CURRENCY'],
            raw=body,
        )
