from datetime import timedelta
from decimal import Decimal
from io import StringIO

from django.core import mail
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone

from apps.ecommerce.models import Order, PaymentTransaction
from apps.ecommerce.services import OrderService
from apps.ecommerce.tasks import (
    cancel_stale_unpaid_orders, send_order_confirmation_email, send_order_status_update_email,
)
from .factories import OrderFactory, OrderItemFactory, PaymentTransactionFactory


def make_stale(order, hours=30):
    Order.objects.filter(pk=order.pk).update(created_at=timezone.now() - timedelta(hours=hours))


class OrderEmailTaskTests(TestCase):
    
    def test_confirmation_email(self):
        item = OrderItemFactory(price=Decimal('12500.00'), quantity=1)
        order = item.order
        
        result = send_order_confirmation_email(order.pk)
        
        self.assertEqual(result, f"Confirmation sent for order {order.pk}")
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, [order.customer.email])
        self.assertIn(order.tracking_number, mail.outbox[0].subject)
        self.assertIn('₦12,500', mail.outbox[0].body)
    
    def test_status_update_email(self):
        order = OrderFactory(status=Order.Status.SHIPPED)
        
        send_order_status_update_email(order.pk)
        
        self.assertEqual(mail.outbox[0].subject, f"Order {order.tracking_number} is now Shipped")
    
    def test_missing_order(self):
        self.assertEqual(send_order_confirmation_email(999999), "Order 999999 not found")
        self.assertEqual(len(mail.outbox), 0)
    
    def test_new_order_queues_confirmation(self):
        with self.captureOnCommitCallbacks(execute=True):
            OrderFactory()
        
        self.assertEqual(len(mail.outbox), 1)
    
    def test_status_change_queues_update(self):
        order = OrderFactory()
        mail.outbox.clear()
        
        with self.captureOnCommitCallbacks(execute=True):
            OrderService(order.store.owner).update_status(order, Order.Status.CONFIRMED)
        
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('Confirmed', mail.outbox[0].subject)


class StaleOrderCleanupTests(TestCase):
    
    def setUp(self):
        self.payment = PaymentTransactionFactory(reference='LXP-STALE00001')
        self.item = OrderItemFactory(order__payment_reference='LXP-STALE00001', quantity=3)
        self.order = self.item.order
        self.product = self.item.product
        self.product.stock_quantity = 7
        self.product.save()
        make_stale(self.order)
    
    def test_task_expires_stale_payments(self):
        result = cancel_stale_unpaid_orders(24)
        
        self.assertEqual(result, "Expired 1 stale payments")
        self.order.refresh_from_db()
        self.payment.refresh_from_db()
        self.product.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.CANCELLED)
        self.assertEqual(self.order.payment_status, Order.PaymentStatus.FAILED)
        self.assertEqual(self.payment.status, PaymentTransaction.Status.FAILED)
        self.assertEqual(self.product.stock_quantity, 10)
    
    def test_recent_and_whatsapp_orders_are_kept(self):
        recent = OrderFactory()
        PaymentTransactionFactory(reference=recent.payment_reference)
        whatsapp = OrderFactory(payment_method=Order.PaymentMethod.WHATSAPP)
        make_stale(whatsapp)
        
        cancel_stale_unpaid_orders(24)
        
        recent.refresh_from_db()
        whatsapp.refresh_from_db()
        self.assertEqual(recent.status, Order.Status.PENDING)
        self.assertEqual(whatsapp.status, Order.Status.PENDING)
    
    def test_command_dry_run_changes_nothing(self):
        out = StringIO()
        
        call_command('cancel_stale_orders', '--dry-run', '--hours', '24', stdout=out)
        
        self.assertIn('DRY RUN: Would expire 1 payments', out.getvalue())
        self.assertIn('LXP-STALE00001', out.getvalue())
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)
    
    def test_command_expires(self):
        out = StringIO()
        
        call_command('cancel_stale_orders', '--hours', '24', stdout=out)
        
        self.assertIn('Expired 1 payments and cancelled their orders', out.getvalue())
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.CANCELLED)
