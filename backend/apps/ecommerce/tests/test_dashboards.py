from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.auth.tests.factories import AdminFactory, UserFactory, VendorFactory
from apps.ecommerce.models import Order
from apps.ecommerce.services import DashboardService
from apps.stores.tests.factories import CashoutRequestFactory, StoreFactory
from .factories import OrderFactory, ProductFactory, ReviewFactory


class DashboardApiTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.vendor = VendorFactory(available_balance=Decimal('1500.00'))
        self.store = StoreFactory(owner=self.vendor)
        self.customer = UserFactory()
    
    def test_customer_dashboard_lists_own_orders(self):
        OrderFactory(customer=self.customer, store=self.store)
        OrderFactory(store=self.store)
        self.client.force_authenticate(self.customer)
        
        response = self.client.get(reverse('ecommerce:customer-dashboard'))
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'customer')
        self.assertEqual(len(response.data['orders']), 1)
        self.assertEqual(response.data['stores'], [])
    
    def test_vendor_sees_stores_on_customer_dashboard(self):
        self.client.force_authenticate(self.vendor)
        
        response = self.client.get(reverse('ecommerce:customer-dashboard'))
        
        self.assertEqual([store['id'] for store in response.data['stores']], [self.store.pk])
    
    def test_vendor_dashboard_summary(self):
        product = ProductFactory(store=self.store)
        ProductFactory(store=self.store)
        ReviewFactory(product=product, rating=5)
        OrderFactory(
            store=self.store, total_amount=Decimal('4000.00'),
            payment_status=Order.PaymentStatus.COMPLETED, status=Order.Status.CONFIRMED
        )
        OrderFactory(store=self.store, total_amount=Decimal('9000.00'))
        OrderFactory(
            store=self.store, total_amount=Decimal('2500.00'),
            payment_status=Order.PaymentStatus.COMPLETED, status=Order.Status.DELIVERED
        )
        OrderFactory(total_amount=Decimal('100000.00'), payment_status=Order.PaymentStatus.COMPLETED)
        CashoutRequestFactory(vendor=self.vendor)
        self.client.force_authenticate(self.vendor)
        
        response = self.client.get(reverse('ecommerce:vendor-dashboard'))
        
        self.assertEqual(response.status_code, 200)
        summary = response.data['summary']
        self.assertEqual(summary['total_revenue'], '6500.00')
        self.assertEqual(summary['pending_orders'], 2)
        self.assertEqual(summary['product_count'], 2)
        self.assertEqual(len(response.data['orders']), 3)
        self.assertEqual(len(response.data['reviews']), 1)
        self.assertEqual(len(response.data['cashout_requests']), 1)
    
    def test_vendor_dashboard_requires_vendor(self):
        self.client.force_authenticate(self.customer)
        
        response = self.client.get(reverse('ecommerce:vendor-dashboard'))
        
        self.assertEqual(response.status_code, 403)
    
    def test_admin_dashboard_totals(self):
        OrderFactory(store=self.store, total_amount=Decimal('1000.00'))
        OrderFactory(store=self.store, total_amount=Decimal('2000.00'))
        ProductFactory(store=self.store)
        self.client.force_authenticate(AdminFactory())
        
        response = self.client.get(reverse('ecommerce:admin-dashboard'))
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total_orders'], 2)
        self.assertEqual(response.data['total_products'], 1)
        self.assertEqual(response.data['total_revenue'], '3000.00')
    
    def test_admin_dashboard_forbidden_to_vendors(self):
        self.client.force_authenticate(self.vendor)
        
        response = self.client.get(reverse('ecommerce:admin-dashboard'))
        
        self.assertEqual(response.status_code, 403)
    
    def test_dashboard_requires_login(self):
        response = self.client.get(reverse('ecommerce:customer-dashboard'))
        
        self.assertIn(response.status_code, (401, 403))


class DashboardServiceTests(TestCase):
    
    def test_revenue_is_reported_in_kobo_precision(self):
        OrderFactory(total_amount=Decimal('1000.50'))
        OrderFactory(total_amount=Decimal('999.50'))
        
        revenue = DashboardService(AdminFactory()).admin_dashboard()['total_revenue']
        
        self.assertEqual(str(revenue), '2000.00')
    
    def test_vendor_without_paid_orders_has_zero_revenue(self):
        vendor = VendorFactory()
        StoreFactory(owner=vendor)
        
        summary = DashboardService(vendor).vendor_dashboard()['summary']
        
        self.assertEqual(str(summary['total_revenue']), '0.00')
