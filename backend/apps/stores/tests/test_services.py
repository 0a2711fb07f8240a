from decimal import Decimal

from django.test import TestCase

from apps.auth.tests.factories import AdminFactory, UserFactory, VendorFactory
from apps.core.services import NotFoundError, PermissionError, ValidationError
from apps.stores.models import CashoutRequest, VendorUpgradeRequest
from apps.stores.services import CashoutService, StoreService, VendorUpgradeService
from .factories import CashoutRequestFactory, StoreFactory, VendorUpgradeRequestFactory


class StoreServiceTests(TestCase):
    
    def setUp(self):
        self.vendor = VendorFactory()
        self.service = StoreService(self.vendor)
    
    def test_create_store(self):
        store = self.service.create_store('  Mama Put  ', description='Jollof and more')
        
        self.assertEqual(store.name, 'Mama Put')
        self.assertEqual(store.owner, self.vendor)
        self.assertTrue(store.is_active)
    
    def test_customer_cannot_create_store(self):
        with self.assertRaises(PermissionError):
            StoreService(UserFactory()).create_store('Nope')
    
    def test_store_names_are_unique_ignoring_case(self):
        StoreFactory(name='Lagos Threads')
        
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_store('lagos threads')
        self.assertEqual(ctx.exception.message, 'A store with this name already exists')
    
    def test_rename_to_own_name_is_allowed(self):
        store = StoreFactory(owner=self.vendor, name='Kente House')
        
        store = self.service.update_store(store, name='KENTE HOUSE')
        
        self.assertEqual(store.name, 'KENTE HOUSE')
    
    def test_get_store_by_name_is_case_insensitive(self):
        store = StoreFactory(name='Abuja Gadgets')
        
        self.assertEqual(self.service.get_store_by_name('abuja gadgets'), store)
    
    def test_inactive_store_is_not_found_by_name(self):
        StoreFactory(name='Hidden', is_active=False)
        
        with self.assertRaises(NotFoundError):
            self.service.get_store_by_name('Hidden')


class VendorUpgradeServiceTests(TestCase):
    
    def setUp(self):
        self.customer = UserFactory()
        self.admin = AdminFactory()
        self.details = {
            'phone': '08031234567',
            'bvn': '12345678901',
            'account_number': '0123456789',
            'account_name': 'Ngozi Eze',
            'bank_name': 'First Bank',
        }
    
    def test_submit_request_normalizes_phone(self):
        request = VendorUpgradeService(self.customer).submit_request(**self.details)
        
        self.assertEqual(request.status, VendorUpgradeRequest.Status.PENDING)
        self.assertEqual(request.phone, '+2348031234567')
    
    def test_missing_fields_are_rejected(self):
        self.details['bank_name'] = ''
        
        with self.assertRaises(ValidationError) as ctx:
            VendorUpgradeService(self.customer).submit_request(**self.details)
        self.assertEqual(ctx.exception.message, 'Please fill in all fields')
    
    def test_bvn_must_have_eleven_digits(self):
        self.details['bvn'] = '1234'
        
        with self.assertRaises(ValidationError) as ctx:
            VendorUpgradeService(self.customer).submit_request(**self.details)
        self.assertEqual(ctx.exception.message, 'BVN must be 11 digits')
    
    def test_bvn_rejects_non_ascii_digits(self):
        self.details['bvn'] = '\u00b2' * 11
        
        with self.assertRaises(ValidationError) as ctx:
            VendorUpgradeService(self.customer).submit_request(**self.details)
        self.assertEqual(ctx.exception.message, 'BVN must be 11 digits')
    
    def test_only_one_pending_request(self):
        VendorUpgradeRequestFactory(user=self.customer)
        
        with self.assertRaises(ValidationError) as ctx:
            VendorUpgradeService(self.customer).submit_request(**self.details)
        self.assertEqual(ctx.exception.message, 'You already have a pending vendor upgrade request')
    
    def test_vendors_cannot_apply(self):
        with self.assertRaises(ValidationError):
            VendorUpgradeService(VendorFactory()).submit_request(**self.details)
    
    def test_approval_promotes_user_and_copies_bank_details(self):
        request = VendorUpgradeRequestFactory(user=self.customer, bank_name='Zenith Bank')
        
        request = VendorUpgradeService(self.admin).review_request(request.pk, approve=True)
        
        self.customer.refresh_from_db()
        self.assertEqual(request.status, VendorUpgradeRequest.Status.APPROVED)
        self.assertEqual(request.admin_notes, 'Approved by admin')
        self.assertEqual(self.customer.role, self.customer.ROLE_VENDOR)
        self.assertEqual(self.customer.bank_name, 'Zenith Bank')
        self.assertEqual(self.customer.bvn, '12345678901')
    
    def test_rejection_keeps_role(self):
        request = VendorUpgradeRequestFactory(user=self.customer)
        
        request = VendorUpgradeService(self.admin).review_request(request.pk, approve=False)
        
        self.customer.refresh_from_db()
        self.assertEqual(request.status, VendorUpgradeRequest.Status.REJECTED)
        self.assertEqual(self.customer.role, self.customer.ROLE_CUSTOMER)
    
    def test_reviewed_request_cannot_be_reviewed_again(self):
        request = VendorUpgradeRequestFactory(user=self.customer, status=VendorUpgradeRequest.Status.REJECTED)
        
        with self.assertRaises(ValidationError):
            VendorUpgradeService(self.admin).review_request(request.pk, approve=True)


class CashoutServiceTests(TestCase):
    
    def setUp(self):
        self.vendor = VendorFactory(available_balance=Decimal('10000.00'))
        self.admin = AdminFactory()
    
    def test_request_within_balance(self):
        cashout = CashoutService(self.vendor).request_cashout('2500.50')
        
        self.assertEqual(cashout.amount, Decimal('2500.50'))
        self.assertEqual(cashout.status, CashoutRequest.Status.PENDING)
        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.available_balance, Decimal('10000.00'))
    
    def test_request_above_balance_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            CashoutService(self.vendor).request_cashout('10000.01')
        self.assertEqual(ctx.exception.message, 'Invalid amount')
    
    def test_zero_amount_is_rejected(self):
        with self.assertRaises(ValidationError):
            CashoutService(self.vendor).request_cashout(0)
    
    def test_customers_cannot_request_cashout(self):
        with self.assertRaises(PermissionError):
            CashoutService(UserFactory()).request_cashout('10')
    
    def test_approval_deducts_balance(self):
        cashout = CashoutRequestFactory(vendor=self.vendor, amount=Decimal('4000.00'))
        
        cashout = CashoutService(self.admin).review_cashout(cashout.pk, approve=True)
        
        self.vendor.refresh_from_db()
        self.assertEqual(cashout.status, CashoutRequest.Status.COMPLETED)
        self.assertEqual(cashout.admin_notes, 'Processed by admin')
        self.assertEqual(self.vendor.available_balance, Decimal('6000.00'))
    
    def test_approval_with_insufficient_balance_leaves_request_pending(self):
        cashout = CashoutRequestFactory(vendor=self.vendor, amount=Decimal('8000.00'))
        self.vendor.available_balance = Decimal('3000.00')
        self.vendor.save()
        
        with self.assertRaises(ValidationError) as ctx:
            CashoutService(self.admin).review_cashout(cashout.pk, approve=True)
        
        self.assertEqual(ctx.exception.message, 'Insufficient balance')
        cashout.refresh_from_db()
        self.vendor.refresh_from_db()
        self.assertEqual(cashout.status, CashoutRequest.Status.PENDING)
        self.assertEqual(self.vendor.available_balance, Decimal('3000.00'))
    
    def test_rejection_keeps_balance(self):
        cashout = CashoutRequestFactory(vendor=self.vendor, amount=Decimal('4000.00'))
        
        cashout = CashoutService(self.admin).review_cashout(cashout.pk, approve=False)
        
        self.vendor.refresh_from_db()
        self.assertEqual(cashout.status, CashoutRequest.Status.REJECTED)
        self.assertEqual(self.vendor.available_balance, Decimal('10000.00'))
    
    def test_unknown_cashout(self):
        with self.assertRaises(NotFoundError):
            CashoutService(self.admin).review_cashout(999999, approve=True)
