# apps/ecommerce/exceptions.py

from rest_framework import status
from rest_framework.exceptions import APIException


class MarketplaceException(APIException):
    """Base exception for the storefront API"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'An error occurred in the marketplace'
    default_code = 'marketplace_error'


class ProductNotAvailableException(MarketplaceException):
    """Exception raised when product is not available"""
    default_detail = 'Product is not available for purchase'
    default_code = 'product_not_available'


class InsufficientStockException(MarketplaceException):
    """Exception raised when there's insufficient stock"""
    default_detail = 'Insufficient stock available'
    default_code = 'insufficient_stock'
    
    def __init__(self, product_name='', available_stock=0, requested_quantity=0):
        self.available_stock = available_stock
        self.requested_quantity = requested_quantity
        detail = (
            f'Only {available_stock} of {product_name} available, requested {requested_quantity}'
            if product_name else self.default_detail
        )
        super().__init__(detail)


class PaymentProcessingException(MarketplaceException):
    """Exception raised during payment processing"""
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = 'Payment processing failed'
    default_code = 'payment_failed'


class InvalidStatusTransitionException(MarketplaceException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Invalid status transition'
    default_code = 'invalid_status_transition'



class OrderNotFoundException(MarketplaceException):
    """Exception raised when order is not found"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Order not found'
    default_code = 'order_not_found'


class CheckoutValidationException(MarketplaceException):
    """Exception raised during checkout validation"""
    default_detail = 'Checkout validation failed'
    default_code = 'checkout_validation_failed'
