from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver
import logging

from .models import Order
from .tasks import send_order_confirmation_email, send_order_status_update_email

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Order)
def order_post_save(sender, instance, created, **kwargs):
    """Queue customer emails once the surrounding transaction commits"""
    if created:
        logger.info(f"New order created: {instance.tracking_number}")
        transaction.on_commit(lambda: send_order_confirmation_email.delay(instance.pk))
        return
    
    update_fields = kwargs.get('update_fields') or []
    if 'status' in update_fields:
        transaction.on_commit(lambda: send_order_status_update_email.delay(instance.pk))
