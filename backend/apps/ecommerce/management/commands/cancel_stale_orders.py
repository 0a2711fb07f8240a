from django.conf import settings
from django.core.management.base import BaseCommand
import logging

from apps.ecommerce.models import Order
from apps.ecommerce.services import PaymentService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Cancel orders whose Paystack or Flutterwave payment is still pending after the given hours'

    def add_arguments(self, parser):
        parser.add_argument(
            '--hours',
            type=int,
            default=settings.MARKETPLACE['STALE_PAYMENT_HOURS'],
            help='Age in hours after which an unpaid order is considered stale'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be cancelled without changing anything'
        )

    def handle(self, *args, **options):
        hours = options['hours']
        dry_run = options['dry_run']

        self.stdout.write(f'Looking for payments pending longer than {hours} hours')

        service = PaymentService()
        references = service.expire_stale(hours, dry_run=dry_run)

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f'DRY RUN: Would expire {len(references)} payments')
            )
            for reference in references[:10]:
                orders = Order.objects.filter(payment_reference=reference).count()
                self.stdout.write(f'  - {reference} ({orders} orders)')
            if len(references) > 10:
                self.stdout.write(f'  ... and {len(references) - 10} more')
        else:
            self.stdout.write(
                self.style.SUCCESS(f'Expired {len(references)} payments and cancelled their orders')
            )
            logger.info(f'Stale order cleanup completed: {len(references)} payments expired')
