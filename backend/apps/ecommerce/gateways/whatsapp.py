# apps/ecommerce/gateways/whatsapp.py

from urllib.parse import quote

from django.conf import settings

from apps.core.utils import format_naira


def build_payment_message(reference, amount):
    return (
        f"Hello! I would like to complete my payment for order {reference}.\n\n"
        f"Amount: {format_naira(amount)}\n\n"
        "Please send me payment instructions."
    )


def build_whatsapp_payment_url(reference, amount, phone_number=None):
    """wa.me deep link that opens a chat with the payment desk, message prefilled"""
    phone_number = phone_number or settings.WHATSAPP_PAYMENT_NUMBER
    message = quote(build_payment_message(reference, amount), safe="!*'()")
    return f"https://wa.me/{phone_number}?text={message}"
