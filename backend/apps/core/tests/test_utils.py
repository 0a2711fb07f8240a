import re
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from apps.core.utils import RandomUploadPath, format_naira, generate_reference, normalize_phone


class ReferenceTests(SimpleTestCase):
    
    def test_payment_reference_format(self):
        self.assertRegex(generate_reference(), r'^LXP-\d{13}-[A-Z0-9]{9}$')
    
    def test_tracking_number_has_no_separator(self):
        self.assertRegex(generate_reference(separator=''), r'^LXP\d{13}[A-Z0-9]{9}$')
    
    def test_references_differ(self):
        self.assertNotEqual(generate_reference(), generate_reference())


class FormattingTests(SimpleTestCase):
    
    def test_whole_amount(self):
        self.assertEqual(format_naira(Decimal('12500.00')), '₦12,500')
    
    def test_fractional_amount(self):
        self.assertEqual(format_naira(Decimal('1250.50')), '₦1,250.5')
    
    def test_upload_path_discards_filename(self):
        path = RandomUploadPath('products')(None, 'My Holiday Photo.JPG')
        
        self.assertTrue(re.match(r'^products/[a-z0-9]{11}-\d{13}\.jpg$', path), path)


class PhoneTests(SimpleTestCase):
    
    def test_local_number_becomes_e164(self):
        self.assertEqual(normalize_phone('0803 123 4567'), '+2348031234567')
    
    def test_invalid_number(self):
        self.assertIsNone(normalize_phone('12345'))
        self.assertIsNone(normalize_phone('not a phone'))


class HealthCheckTests(TestCase):
    
    def test_health(self):
        response = self.client.get(reverse('health:health-check'))
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['services']['database'], 'ok')
    
    def test_cache_health(self):
        response = self.client.get(reverse('health:cache-health'))
        
        self.assertEqual(response.status_code, 200)
