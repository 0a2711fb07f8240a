"""
Order, checkout and payment serializers
"""

from rest_framework import serializers

from apps.auth.serializers import UserSummarySerializer
from apps.stores.serializers import StoreSummarySerializer
from ..models import Order, OrderItem, OrderTracking, PaymentTransaction


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    
    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_name', 'quantity', 'price', 'line_total']
        read_only_fields = fields


class OrderTrackingSerializer(serializers.ModelSerializer):
    
    class Meta:
        model = OrderTracking
        fields = ['id', 'status', 'location', 'notes', 'created_at']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with store, customer contact details and items"""
    
    store = StoreSummarySerializer(read_only=True)
    customer = UserSummarySerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    
    class Meta:
        model = Order
        fields = [
            'id', 'tracking_number', 'store', 'customer', 'total_amount', 'status',
            'payment_method', 'payment_status', 'payment_reference', 'shipping_address',
            'items', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class OrderDetailSerializer(OrderSerializer):
    """Order plus its tracking timeline, oldest event first"""
    
    tracking = serializers.SerializerMethodField()
    
    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['tracking']
        read_only_fields = fields
    
    def get_tracking(self, obj):
        events = obj.tracking_events.order_by('created_at', 'id')
        return OrderTrackingSerializer(events, many=True).data


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ShippingAddressSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    address = serializers.CharField(required=False, allow_blank=True, default='')
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    state = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class CheckoutSerializer(serializers.Serializer):
    shipping = ShippingAddressSerializer()
    payment_method = serializers.CharField(max_length=20)


class PaymentTransactionSerializer(serializers.ModelSerializer):
    
    class Meta:
        model = PaymentTransaction
        fields = [
            'id', 'reference', 'provider', 'amount', 'currency', 'status',
            'authorization_url', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class VerifyPaymentSerializer(serializers.Serializer):
    reference = serializers.CharField(max_length=64)
