# apps/ecommerce/gateways/__init__.py

from ..exceptions import PaymentProcessingException
from .base import PaymentInitialization, PaymentVerification
from .flutterwave import FlutterwaveGateway
from .paystack import PaystackGateway
from .whatsapp import build_whatsapp_payment_url

GATEWAYS = {
    PaystackGateway.name: PaystackGateway,
    FlutterwaveGateway.name: FlutterwaveGateway,
}


def get_gateway(provider):
    """Instantiate the hosted-checkout client for a provider"""
    try:
        gateway_class = GATEWAYS[provider]
    except KeyError:
        raise PaymentProcessingException(f"Unsupported payment provider '{provider}'")
    return gateway_class()


__all__ = [
    'PaymentInitialization', 'PaymentVerification',
    'PaystackGateway', 'FlutterwaveGateway', 'GATEWAYS',
    'get_gateway', 'build_whatsapp_payment_url',
]
