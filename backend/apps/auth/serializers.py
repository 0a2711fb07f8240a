# apps/auth/serializers.py

from rest_framework import serializers
from .models import User


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration"""
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login"""
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserProfileSerializer(serializers.ModelSerializer):
    """Serializer for the signed-in user's own profile"""
    is_vendor = serializers.ReadOnlyField()
    is_platform_admin = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            'id', 'email', 'full_name', 'phone', 'avatar', 'role',
            'available_balance', 'bvn', 'account_number', 'account_name', 'bank_name',
            'is_vendor', 'is_platform_admin', 'created_at'
        ]
        read_only_fields = [
            'id', 'email', 'role', 'available_balance', 'bvn', 'account_number',
            'account_name', 'bank_name', 'created_at'
        ]


class UserSummarySerializer(serializers.ModelSerializer):
    """Customer details embedded in orders and requests"""

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'phone']
        read_only_fields = fields


class AdminUserSerializer(serializers.ModelSerializer):
    """User listing for the admin back office"""

    class Meta:
        model = User
        fields = [
            'id', 'email', 'full_name', 'phone', 'role', 'available_balance',
            'bank_name', 'is_active', 'created_at'
        ]
        read_only_fields = fields


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(trim_whitespace=False)


class PasswordResetRequestSerializer(serializers.Serializer):
    """Serializer for password reset request"""
    email = serializers.CharField(max_length=254)


class PasswordResetSerializer(serializers.Serializer):
    """Serializer for password reset"""
    uid = serializers.CharField()
    token = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)
    confirm_password = serializers.CharField(trim_whitespace=False)

    def validate(self, attrs):
        if attrs['password'] != attrs['confirm_password']:
            raise serializers.ValidationError("Passwords do not match")
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh_token = serializers.CharField(required=False, allow_blank=True)
