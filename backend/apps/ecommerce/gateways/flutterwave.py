# apps/ecommerce/gateways/flutterwave.py

from decimal import Decimal

from django.conf import settings

from ..constants import FLUTTERWAVE_DESCRIPTION, FLUTTERWAVE_PAYMENT_OPTIONS
from ..exceptions import PaymentProcessingException
from .base import BasePaymentGateway, PaymentInitialization, PaymentVerification


class FlutterwaveGateway(BasePaymentGateway):
    """Flutterwave Standard (hosted payment link) client"""
    
    name = 'flutterwave'
    
    def __init__(self, secret_key=None, base_url=None, timeout=None):
        super().__init__(
            secret_key or settings.FLUTTERWAVE_SECRET_KEY,
            base_url or settings.FLUTTERWAVE_BASE_URL,
            timeout
        )
    
    def initialize(self, reference, amount, email, callback_url, customer_name=''):
        payload = {
            'tx_ref': reference,
            'amount': str(amount),
            'currency': settings.MARKETPLACE['CURRENCY'],
            'redirect_url': callback_url,
            'payment_options': FLUTTERWAVE_PAYMENT_OPTIONS,
            'customer': {
                'email': email,
                'name': customer_name,
            },
            'customizations': {
                'title': settings.MARKETPLACE['NAME'],
                'description': FLUTTERWAVE_DESCRIPTION,
            },
        }
        body = self._request('POST', '/v3/payments', json=payload)
        
        data = body.get('data') or {}
        if body.get('status') != 'success' or not data.get('link'):
            raise PaymentProcessingException(body.get('message') or 'Could not start Flutterwave payment')
        
        return PaymentInitialization(
            provider=self.name,
            reference=reference,
            authorization_url=data['link'],
            raw=body,
        )
    
    def verify(self, reference):
        body = self._request('GET', '/v3/transactions/verify_by_reference', params={'tx_ref': reference})
        data = body.get('data') or {}
        
        amount = data.get('amount')
        return PaymentVerification(
            provider=self.name,
            reference=reference,
            paid=body.get('status') == 'success' and data.get('status') == 'successful',
            failed=data.get('status') == 'failed',
            amount=Decimal(str(amount)) if amount is not None else None,
            currency=data.get('currency') or settings.MARKETPLACE['CURRENCY'],
            raw=body,
        )
