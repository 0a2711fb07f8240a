# apps/auth/tokens.py

from django.contrib.auth.tokens import default_token_generator
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken


def create_tokens_for_user(user):
    """
    Create JWT tokens for user with marketplace claims
    """
    refresh = RefreshToken.for_user(user)
    
    # Add custom claims
    refresh['email'] = user.email
    refresh['role'] = user.role
    refresh['full_name'] = user.full_name
    
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def blacklist_token(refresh_token):
    """
    Blacklist a refresh token
    """
    try:
        token = RefreshToken(refresh_token)
        token.blacklist()
        return True
    except TokenError:
        return False


def make_password_reset_token(user):
    """Return (uid, token) for a password reset link"""
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    return uid, default_token_generator.make_token(user)


def resolve_password_reset_token(User, uid, token):
    """Return the user a reset (uid, token) pair belongs to, or None"""
    try:
        user = User.objects.get(pk=force_str(urlsafe_base64_decode(uid)))
    except (TypeError, ValueError, OverflowError, User.DoesNotExist):
        return None
    
    if not default_token_generator.check_token(user, token):
        return None
    return user
