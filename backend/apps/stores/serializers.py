# apps/stores/serializers.py

from rest_framework import serializers

from apps.auth.serializers import UserSummarySerializer
from .models import Store, VendorUpgradeRequest, CashoutRequest


class StoreSerializer(serializers.ModelSerializer):
    """Store with its owner's display name"""
    owner_name = serializers.CharField(source='owner.full_name', read_only=True)
    
    class Meta:
        model = Store
        fields = [
            'id', 'owner', 'owner_name', 'name', 'description', 'logo', 'banner',
            'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'owner', 'owner_name', 'is_active', 'created_at', 'updated_at']


class StoreSummarySerializer(serializers.ModelSerializer):
    """Compact store reference embedded in products and orders"""
    
    class Meta:
        model = Store
        fields = ['id', 'name', 'logo']
        read_only_fields = fields


class StoreActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField(required=False)


class VendorUpgradeRequestSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    
    class Meta:
        model = VendorUpgradeRequest
        fields = [
            'id', 'user', 'phone', 'bvn', 'account_number', 'account_name', 'bank_name',
            'status', 'admin_notes', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'user', 'status', 'admin_notes', 'created_at', 'updated_at']
        extra_kwargs = {
            field: {'required': False, 'allow_blank': True, 'default': ''}
            for field in ['phone', 'bvn', 'account_number', 'account_name', 'bank_name']
        }


class CashoutRequestSerializer(serializers.ModelSerializer):
    vendor = UserSummarySerializer(read_only=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False)
    
    class Meta:
        model = CashoutRequest
        fields = ['id', 'vendor', 'amount', 'status', 'admin_notes', 'created_at', 'updated_at']
        read_only_fields = ['id', 'vendor', 'status', 'admin_notes', 'created_at', 'updated_at']


class ReviewDecisionSerializer(serializers.Serializer):
    """Admin decision on a pending request"""
    approve = serializers.BooleanField()
