from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.auth.tokens import create_tokens_for_user, make_password_reset_token
from .factories import DEFAULT_PASSWORD, AdminFactory, UserFactory

User = get_user_model()


class RegistrationTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.url = reverse('auth:register')
    
    def test_register_creates_customer_and_returns_tokens(self):
        response = self.client.post(self.url, {
            'email': '  Ada@Example.com ',
            'password': 'secret123',
            'full_name': 'Ada Obi',
        })
        
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['message'], 'User created successfully')
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])
        
        user = User.objects.get(email='ada@example.com')
        self.assertEqual(user.role, User.ROLE_CUSTOMER)
        self.assertEqual(user.full_name, 'Ada Obi')
    
    def test_register_rejects_duplicate_email(self):
        UserFactory(email='taken@example.com')
        
        response = self.client.post(self.url, {'email': 'TAKEN@example.com', 'password': 'secret123'})
        
        self.assertEqual(response.status_code, 400)
        self.assertIn('already registered', response.data['error'])
    
    def test_register_rejects_short_password(self):
        response = self.client.post(self.url, {'email': 'new@example.com', 'password': 'abc'})
        
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Password must be at least 6 characters')
        self.assertFalse(User.objects.filter(email='new@example.com').exists())


class LoginLogoutTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(email='login@example.com')
    
    def test_login_with_valid_credentials(self):
        response = self.client.post(reverse('auth:login'), {
            'email': 'LOGIN@example.com',
            'password': DEFAULT_PASSWORD,
        })
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Login successful')
        self.assertEqual(response.data['user']['email'], 'login@example.com')
        self.assertIn('access', response.data['tokens'])
    
    def test_login_with_wrong_password(self):
        response = self.client.post(reverse('auth:login'), {
            'email': 'login@example.com',
            'password': 'wrong-password',
        })
        
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Invalid credentials')
    
    def test_login_rejects_disabled_account(self):
        self.user.is_active = False
        self.user.save()
        
        response = self.client.post(reverse('auth:login'), {
            'email': 'login@example.com',
            'password': DEFAULT_PASSWORD,
        })
        
        self.assertEqual(response.status_code, 400)
    
    def test_logout_blacklists_refresh_token(self):
        tokens = create_tokens_for_user(self.user)
        self.client.force_authenticate(self.user)
        
        response = self.client.post(reverse('auth:logout'), {'refresh_token': tokens['refresh']})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Successfully logged out')
        
        refresh = self.client.post(reverse('auth:token_refresh'), {'refresh': tokens['refresh']})
        self.assertIn(refresh.status_code, (401, 403))
    
    def test_logout_without_token(self):
        self.client.force_authenticate(self.user)
        
        response = self.client.post(reverse('auth:logout'), {})
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Logged out (no refresh token provided)')
    
    def test_logout_with_invalid_token(self):
        self.client.force_authenticate(self.user)
        
        response = self.client.post(reverse('auth:logout'), {'refresh_token': 'not-a-token'})
        
        self.assertEqual(response.status_code, 400)


class ProfileTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(full_name='Chidi Okafor')
        self.client.force_authenticate(self.user)
    
    def test_get_profile(self):
        response = self.client.get(reverse('auth:profile'))
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['full_name'], 'Chidi Okafor')
        self.assertEqual(response.data['role'], User.ROLE_CUSTOMER)
        self.assertFalse(response.data['is_vendor'])
    
    def test_profile_update_cannot_change_role_or_email(self):
        response = self.client.patch(reverse('auth:profile'), {
            'full_name': 'Chidi O.',
            'role': User.ROLE_ADMIN,
            'email': 'other@example.com',
        })
        
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, 'Chidi O.')
        self.assertEqual(self.user.role, User.ROLE_CUSTOMER)
        self.assertNotEqual(self.user.email, 'other@example.com')
    
    def test_profile_requires_authentication(self):
        response = APIClient().get(reverse('auth:profile'))
        
        self.assertIn(response.status_code, (401, 403))
    
    def test_change_password(self):
        response = self.client.post(reverse('auth:change_password'), {
            'old_password': DEFAULT_PASSWORD,
            'new_password': 'brand-new-pass',
        })
        
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('brand-new-pass'))
    
    def test_change_password_with_wrong_current_password(self):
        response = self.client.post(reverse('auth:change_password'), {
            'old_password': 'nope',
            'new_password': 'brand-new-pass',
        })
        
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Current password is incorrect')


class PasswordResetTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(email='forgot@example.com')
    
    def test_reset_request_sends_email_for_known_account(self):
        response = self.client.post(reverse('auth:password_reset_request'), {'email': 'forgot@example.com'})
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('/reset-password?uid=', mail.outbox[0].body)
    
    def test_reset_request_answers_the_same_for_unknown_email(self):
        response = self.client.post(reverse('auth:password_reset_request'), {'email': 'ghost@example.com'})
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data['message'],
            'If an account exists for this email, a password reset link has been sent.'
        )
        self.assertEqual(len(mail.outbox), 0)
    
    def test_reset_password_with_valid_token(self):
        uid, token = make_password_reset_token(self.user)
        
        response = self.client.post(reverse('auth:password_reset'), {
            'uid': uid,
            'token': token,
            'password': 'reset-pass-1',
            'confirm_password': 'reset-pass-1',
        })
        
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('reset-pass-1'))
    
    def test_reset_password_with_bad_token(self):
        uid, _ = make_password_reset_token(self.user)
        
        response = self.client.post(reverse('auth:password_reset'), {
            'uid': uid,
            'token': 'bad-token',
            'password': 'reset-pass-1',
            'confirm_password': 'reset-pass-1',
        })
        
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Invalid or expired password reset link')


class AdminUserTests(TestCase):
    
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.customer = UserFactory()
    
    def test_admin_lists_users(self):
        self.client.force_authenticate(self.admin)
        
        response = self.client.get(reverse('auth:admin_user_list'))
        
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['count'], 2)
    
    def test_customer_cannot_list_users(self):
        self.client.force_authenticate(self.customer)
        
        response = self.client.get(reverse('auth:admin_user_list'))
        
        self.assertEqual(response.status_code, 403)
    
    def test_admin_changes_role(self):
        self.client.force_authenticate(self.admin)
        
        response = self.client.post(
            reverse('auth:admin_user_role', args=[self.customer.pk]),
            {'role': User.ROLE_VENDOR}
        )
        
        self.assertEqual(response.status_code, 200)
        self.customer.refresh_from_db()
        self.assertEqual(self.customer.role, User.ROLE_VENDOR)
    
    def test_admin_cannot_demote_self(self):
        self.client.force_authenticate(self.admin)
        
        response = self.client.post(
            reverse('auth:admin_user_role', args=[self.admin.pk]),
            {'role': User.ROLE_CUSTOMER}
        )
        
        self.assertEqual(response.status_code, 403)
