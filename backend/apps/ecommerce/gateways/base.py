# apps/ecommerce/gateways/base.py

"""
HTTP plumbing shared by the payment provider clients
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions import PaymentProcessingException

logger = logging.getLogger(__name__)


@dataclass
class PaymentInitialization:
    """Where to send the customer to pay"""
    provider: str
    reference: str
    authorization_url: str
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PaymentVerification:
    """Provider's view of a payment"""
    provider: str
    reference: str
    paid: bool
    failed: bool = False
    amount: Optional[Decimal] = None
    currency: str = 'NGN'
    raw: Dict[str, Any] = field(default_factory=dict)


class BasePaymentGateway:
    """
    Base client for a hosted-checkout payment provider.
    
    Subclasses set `name`, build their request payloads and interpret responses.
    Every transport or provider failure surfaces as PaymentProcessingException.
    """
    
    name = None
    
    def __init__(self, secret_key: str, base_url: str, timeout: Optional[int] = None):
        if not secret_key:
            raise PaymentProcessingException(f"{self.name} is not configured")
        
        self.secret_key = secret_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout or settings.PAYMENT_REQUEST_TIMEOUT
        
        self.session = requests.Session()
        retry_strategy = Retry(
            total=2,
            backoff_factor=0.5,
            status_forcelist=[502, 503, 504],
            allowed_methods=["GET"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        })
    
    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body"""
        url = f"{self.base_url}{path}"
        kwargs.setdefault('timeout', self.timeout)
        
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout:
            logger.error(f"{self.name} request timed out: {method} {path}")
            raise PaymentProcessingException(f"{self.name} did not respond in time")
        except requests.exceptions.RequestException as e:
            logger.error(f"{self.name} request failed: {method} {path}: {e}")
            raise PaymentProcessingException(f"Could not reach {self.name}")
        
        try:
            body = response.json()
        except ValueError:
            body = {}
        
        if not response.ok:
            message = body.get('message') if isinstance(body, dict) else None
            logger.warning(f"{self.name} returned {response.status_code} for {method} {path}: {message}")
            raise PaymentProcessingException(message or f"{self.name} rejected the request")
        
        return body
    
    def initialize(self, reference: str, amount: Decimal, email: str,
                   callback_url: str, customer_name: str = '') -> PaymentInitialization:
        raise NotImplementedError
    
    def verify(self, reference: str) -> PaymentVerification:
        raise NotImplementedError
