from decimal import Decimal
from unittest.mock import MagicMock, patch

import requests
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from apps.auth.tests.factories import UserFactory
from apps.ecommerce.exceptions import (
    CheckoutValidationException, InsufficientStockException, PaymentProcessingException,
    ProductNotAvailableException,
)
from apps.ecommerce.models import CartItem, Order, OrderTracking, PaymentTransaction
from apps.ecommerce.services import CartService, CheckoutService
from apps.stores.tests.factories import StoreFactory
from .factories import ProductFactory

SHIPPING = {
    'full_name': 'Amaka Nwosu',
    'phone': '08031234567',
    'address': '5 Admiralty Way',
    'city': 'Lekki',
    'state': 'Lagos',
}


def provider_response(body, ok=True, status_code=200):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = body
    return response


class CheckoutServiceTests(TestCase):
    
    def setUp(self):
        self.customer = UserFactory(full_name='Amaka Nwosu', phone='+2348031234567')
        self.store_a = StoreFactory(name='Store A')
        self.store_b = StoreFactory(name='Store B')
        self.shoes = ProductFactory(store=self.store_a, price=Decimal('10000.00'), stock_quantity=5)
        self.bag = ProductFactory(store=self.store_a, price=Decimal('2500.00'), stock_quantity=2)
        self.phone = ProductFactory(store=self.store_b, price=Decimal('50000.00'), stock_quantity=1)
        
        cart = CartService(self.customer)
        cart.add_item(self.shoes.pk, 2)
        cart.add_item(self.bag.pk, 1)
        cart.add_item(self.phone.pk, 1)
        
        self.service = CheckoutService(self.customer)
    
    def test_whatsapp_checkout_creates_one_order_per_store(self):
        result = self.service.checkout(SHIPPING, 'whatsapp')
        
        orders = Order.objects.filter(payment_reference=result['reference']).order_by('id')
        self.assertEqual(orders.count(), 2)
        self.assertEqual(
            {order.store_id: order.total_amount for order in orders},
            {self.store_a.pk: Decimal('22500.00'), self.store_b.pk: Decimal('50000.00')}
        )
        self.assertEqual(result['total_amount'], Decimal('72500.00'))
        self.assertTrue(result['authorization_url'].startswith('https://wa.me/'))
        
        payment = PaymentTransaction.objects.get(reference=result['reference'])
        self.assertEqual(payment.amount, Decimal('72500.00'))
        self.assertEqual(payment.status, PaymentTransaction.Status.PENDING)
    
    def test_checkout_snapshots_items_and_decrements_stock(self):
        result = self.service.checkout(SHIPPING, 'whatsapp')
        
        order = Order.objects.get(payment_reference=result['reference'], store=self.store_a)
        self.assertEqual(
            sorted((item.product_name, item.quantity, item.price) for item in order.items.all()),
            sorted([(self.shoes.name, 2, Decimal('10000.00')), (self.bag.name, 1, Decimal('2500.00'))])
        )
        self.assertEqual(order.shipping_address['city'], 'Lekki')
        
        self.shoes.refresh_from_db()
        self.phone.refresh_from_db()
        self.assertEqual(self.shoes.stock_quantity, 3)
        self.assertEqual(self.phone.stock_quantity, 0)
    
    def test_checkout_adds_placed_tracking_and_clears_cart(self):
        result = self.service.checkout(SHIPPING, 'whatsapp')
        
        for order in Order.objects.filter(payment_reference=result['reference']):
            event = OrderTracking.objects.get(order=order)
            self.assertEqual(event.status, 'Order Placed')
        self.assertFalse(CartItem.objects.filter(cart__user=self.customer).exists())
    
    def test_insufficient_stock_places_nothing(self):
        self.phone.stock_quantity = 0
        self.phone.save()
        
        with self.assertRaises(InsufficientStockException):
            self.service.checkout(SHIPPING, 'whatsapp')
        
        self.assertFalse(Order.objects.exists())
        self.assertFalse(PaymentTransaction.objects.exists())
        self.shoes.refresh_from_db()
        self.assertEqual(self.shoes.stock_quantity, 5)
        self.assertEqual(CartItem.objects.filter(cart__user=self.customer).count(), 3)
    
    def test_unavailable_product_blocks_checkout(self):
        self.store_b.is_active = False
        self.store_b.save()
        
        with self.assertRaises(ProductNotAvailableException) as ctx:
            self.service.checkout(SHIPPING, 'whatsapp')
        
        self.assertIn('no longer available', str(ctx.exception.detail))
        self.assertFalse(Order.objects.exists())
    
    def test_empty_cart(self):
        CartService(self.customer).clear()
        
        with self.assertRaises(CheckoutValidationException) as ctx:
            self.service.checkout(SHIPPING, 'whatsapp')
        self.assertEqual(str(ctx.exception.detail), 'Your cart is empty')
    
    def test_missing_shipping_fields(self):
        with self.assertRaises(CheckoutValidationException) as ctx:
            self.service.checkout({**SHIPPING, 'city': ''}, 'whatsapp')
        self.assertEqual(str(ctx.exception.detail), 'Please fill in all shipping details')
    
    def test_name_and_phone_default_to_profile(self):
        shipping = self.service.build_shipping_address({**SHIPPING, 'full_name': '', 'phone': ''})
        
        self.assertEqual(shipping['full_name'], 'Amaka Nwosu')
        self.assertEqual(shipping['phone'], '+2348031234567')
    
    def test_unsupported_payment_method(self):
        with self.assertRaises(CheckoutValidationException):
            self.service.checkout(SHIPPING, 'bitcoin')
    
    @patch.object(requests.Session, 'request')
    def test_paystack_checkout_returns_authorization_url(self, mock_request):
        mock_request.return_value = provider_response({
            'status': True,
            'message': 'Authorization URL created',
            'data': {'authorization_url': 'https://checkout.paystack.com/abc123', 'reference': 'x'},
        })
        
        result = self.service.checkout(SHIPPING, 'paystack')
        
        self.assertEqual(result['authorization_url'], 'https://checkout.paystack.com/abc123')
        method, url = mock_request.call_args[0]
        payload = mock_request.call_args[1]['json']
        self.assertEqual(method, 'POST')
        self.assertTrue(url.endswith('/transaction/initialize'))
        self.assertEqual(payload['amount'], 7250000)
        self.assertEqual(payload['email'], self.customer.email)
        self.assertEqual(payload['reference'], result['reference'])
        self.assertIn(f"reference={result['reference']}", payload['callback_url'])
    
    @patch.object(requests.Session, 'request')
    def test_flutterwave_checkout_sends_tx_ref_and_customer(self, mock_request):
        mock_request.return_value = provider_response({
            'status': 'success',
            'data': {'link': 'https://checkout.flutterwave.com/v3/hosted/pay/xyz'},
        })
        
        result = self.service.checkout(SHIPPING, 'flutterwave')
        
        self.assertEqual(result['authorization_url'], 'https://checkout.flutterwave.com/v3/hosted/pay/xyz')
        payload = mock_request.call_args[1]['json']
        self.assertEqual(payload['tx_ref'], result['reference'])
        self.assertEqual(payload['payment_options'], 'card,banktransfer,ussd')
        self.assertEqual(payload['customer']['email'], self.customer.email)
    
    @patch.object(requests.Session, 'request')
    def test_provider_failure_leaves_orders_pending(self, mock_request):
        mock_request.return_value = provider_response(
            {'status': False, 'message': 'Invalid key'}, ok=False, status_code=401
        )
        
        with self.assertRaises(PaymentProcessingException):
            self.service.checkout(SHIPPING, 'paystack')
        
        self.assertEqual(Order.objects.filter(status=Order.Status.PENDING).count(), 2)
        self.assertEqual(PaymentTransaction.objects.get().status, PaymentTransaction.Status.PENDING)
    
    @override_settings(PAYSTACK_SECRET_KEY='')
    @patch.object(requests.Session, 'request')
    def test_unconfigured_provider_places_nothing(self, mock_request):
        with self.assertRaises(PaymentProcessingException):
            self.service.checkout(SHIPPING, 'paystack')

        mock_request.assert_not_called()
        self.assertFalse(Order.objects.exists())
        self.assertFalse(PaymentTransaction.objects.exists())
        self.shoes.refresh_from_db()
        self.assertEqual(self.shoes.stock_quantity, 5)
        self.assertEqual(CartItem.objects.filter(cart__user=self.customer).count(), 3)

    @patch.object(requests.Session, 'request', side_effect=requests.exceptions.Timeout)
    def test_provider_timeout(self, mock_request):
        with self.assertRaises(PaymentProcessingException):
            self.service.checkout(SHIPPING, 'paystack')


class CheckoutApiTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.customer = UserFactory()
        self.client.force_authenticate(self.customer)
        self.product = ProductFactory(price=Decimal('3000.00'), stock_quantity=4)
        CartService(self.customer).add_item(self.product.pk, 2)
    
    def test_checkout_endpoint(self):
        response = self.client.post(reverse('ecommerce:checkout'), {
            'shipping': SHIPPING,
            'payment_method': 'whatsapp',
        }, format='json')
        
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['total_amount'], '6000.00')
        self.assertEqual(len(response.data['orders']), 1)
        self.assertEqual(response.data['orders'][0]['status'], Order.Status.PENDING)
        self.assertIn('wa.me', response.data['authorization_url'])
    
    def test_checkout_with_too_much_quantity(self):
        CartItem.objects.filter(cart__user=self.customer).update(quantity=9)
        
        response = self.client.post(reverse('ecommerce:checkout'), {
            'shipping': SHIPPING,
            'payment_method': 'whatsapp',
        }, format='json')
        
        self.assertEqual(response.status_code, 400)
        self.assertIn('detail', response.data)
        self.assertFalse(Order.objects.exists())
