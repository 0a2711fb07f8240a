import string
import time

import phonenumbers
import shortuuid
from django.conf import settings
from django.utils.deconstruct import deconstructible


REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def generate_reference(prefix=None, separator='-', length=9):
    """
    Generate a unique reference with prefix, millisecond timestamp and a random suffix.
    
    Args:
        prefix (str, optional): The prefix for the reference. Defaults to the marketplace prefix ('LXP')
        separator (str): Joins the parts. Payment references use '-', tracking numbers use ''
        length (int): Length of the random uppercase suffix
        
    Returns:
        str: e.g. 'LXP-1718000000000-K3J9QZ0AB' or 'LXP1718000000000K3J9QZ0AB'
    """
    prefix = prefix or settings.MARKETPLACE['REFERENCE_PREFIX']
    timestamp = int(time.time() * 1000)
    suffix = shortuuid.ShortUUID(alphabet=REFERENCE_ALPHABET).random(length=length)
    return f"{prefix}{separator}{timestamp}{separator}{suffix}"


@deconstructible
class RandomUploadPath:
    """
    upload_to callable storing files as '<bucket>/<random>-<timestamp>.<ext>'.
    The original file name is discarded apart from its extension.
    """
    
    def __init__(self, bucket):
        self.bucket = bucket
    
    def __call__(self, instance, filename):
        ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'bin'
        name = f"{shortuuid.uuid()[:11].lower()}-{int(time.time() * 1000)}.{ext}"
        return f"{self.bucket}/{name}"
    
    def __eq__(self, other):
        return isinstance(other, RandomUploadPath) and self.bucket == other.bucket


def format_naira(amount):
    """Format an amount the way payment messages show it: ₦12,500 or ₦12,500.5"""
    symbol = settings.MARKETPLACE['CURRENCY_SYMBOL']
    formatted = f"{amount:,.2f}".rstrip('0').rstrip('.')
    return f"{symbol}{formatted}"


def normalize_phone(phone, region=None):
    """
    Parse a phone number and return it in E.164 form.
    Returns None when the number cannot be parsed or is not valid for the region.
    """
    region = region or settings.MARKETPLACE['PHONE_REGION']
    try:
        parsed = phonenumbers.parse(phone or '', region)
    except phonenumbers.NumberParseException:
        return None
    
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
