"""
Account service: registration, profiles, password reset and role management
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction

from apps.core.services import BaseService, ValidationError, PermissionError
from .tokens import make_password_reset_token, resolve_password_reset_token

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


class AccountService(BaseService):
    """Service for user accounts and marketplace roles"""

    def register(self, email: str, password: str, full_name: str = '') -> User:
        """Create a customer account"""
        email = (email or '').strip().lower()
        if not email or not password:
            raise ValidationError("Email and password required")
        email = self.validate_email(email)
        self.validate_password(password)

        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError(
                'User already registered. Please sign in or use "forgot password".',
                details={'email': email}
            )

        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=self.sanitize_string(full_name, 150),
            role=User.ROLE_CUSTOMER,
        )
        self.log_info(f"Registered customer {user.email}", {'user_id': user.pk})
        return user

    def validate_password(self, password: str):
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    def change_password(self, user: User, old_password: str, new_password: str) -> User:
        if not user.check_password(old_password or ''):
            raise ValidationError("Current password is incorrect")
        self.validate_password(new_password or '')

        user.set_password(new_password)
        user.save(update_fields=['password', 'updated_at'])
        self.log_info(f"Password changed for {user.email}")
        return user

    def request_password_reset(self, email: str) -> bool:
        """
        Email a reset link when the account exists.
        Returns whether an email was sent; callers answer the same way either way.
        """
        email = (email or '').strip().lower()
        user = User.objects.filter(email__iexact=email, is_active=True).first()
        if user is None:
            self.log_info("Password reset requested for unknown email", {'email': email})
            return False

        uid, token = make_password_reset_token(user)
        reset_url = f"{settings.FRONTEND_URL}/reset-password?uid={uid}&token={token}"

        send_mail(
            subject=f"Reset your {settings.MARKETPLACE['NAME']} password",
            message=(
                f"Hello {user.get_short_name()},\n\n"
                f"Use the link below to choose a new password:\n{reset_url}\n\n"
                "If you did not request this, you can ignore this email."
            ),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            fail_silently=False,
        )
        self.log_info(f"Password reset email sent to {user.email}")
        return True

    def reset_password(self, uid: str, token: str, new_password: str) -> User:
        user = resolve_password_reset_token(User, uid, token)
        if user is None:
            raise ValidationError("Invalid or expired password reset link")
        self.validate_password(new_password or '')

        user.set_password(new_password)
        user.save(update_fields=['password', 'updated_at'])
        self.log_info(f"Password reset completed for {user.email}")
        return user

    @transaction.atomic
    def update_role(self, target: User, role: str) -> User:
        """Admin action: change a user's marketplace role"""
        valid_roles = [choice for choice, _ in User.ROLE_CHOICES]
        if role not in valid_roles:
            raise ValidationError(
                f"Invalid role '{role}'",
                details={'valid_roles': valid_roles}
            )

        if self.user and target.pk == self.user.pk and role != User.ROLE_ADMIN:
            raise PermissionError("Admins cannot remove their own admin role")

        previous = target.role
        target.role = role
        target.save(update_fields=['role', 'updated_at'])

        self.create_audit_log('update_role', 'user', target.pk, {'from': previous, 'to': role})
        return target
