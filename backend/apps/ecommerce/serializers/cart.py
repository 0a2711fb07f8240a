"""
Cart serializers
"""

from decimal import Decimal

from rest_framework import serializers

from ..models import Cart, CartItem


class CartItemSerializer(serializers.ModelSerializer):
    """Serializer for cart lines, priced from the product"""
    
    product_id = serializers.IntegerField(source='product.id', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    store_id = serializers.IntegerField(source='product.store_id', read_only=True)
    store_name = serializers.CharField(source='product.store.name', read_only=True)
    stock_quantity = serializers.IntegerField(source='product.stock_quantity', read_only=True)
    image = serializers.SerializerMethodField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    
    class Meta:
        model = CartItem
        fields = [
            'id', 'product_id', 'product_name', 'store_id', 'store_name', 'stock_quantity',
            'image', 'quantity', 'unit_price', 'line_total'
        ]
        read_only_fields = fields
    
    def get_image(self, obj):
        first = obj.product.images.first()
        if not first:
            return None
        request = self.context.get('request')
        return request.build_absolute_uri(first.image.url) if request else first.image.url


class CartSerializer(serializers.ModelSerializer):
    """Cart with lines, lines grouped by store, and totals"""
    
    items = serializers.SerializerMethodField()
    stores = serializers.SerializerMethodField()
    total_amount = serializers.SerializerMethodField()
    item_count = serializers.SerializerMethodField()
    
    class Meta:
        model = Cart
        fields = ['id', 'items', 'stores', 'total_amount', 'item_count', 'updated_at']
        read_only_fields = fields
    
    def _lines(self, obj):
        if not hasattr(self, '_cached_lines'):
            self._cached_lines = obj.get_lines()
        return self._cached_lines
    
    def get_items(self, obj):
        return CartItemSerializer(self._lines(obj), many=True, context=self.context).data
    
    def get_stores(self, obj):
        groups = []
        for store, lines in obj.lines_by_store(self._lines(obj)).items():
            groups.append({
                'store_id': store.pk,
                'store_name': store.name,
                'items': CartItemSerializer(lines, many=True, context=self.context).data,
                'subtotal': str(sum((line.line_total for line in lines), Decimal('0.00'))),
            })
        return groups
    
    def get_total_amount(self, obj):
        return str(sum((line.line_total for line in self._lines(obj)), Decimal('0.00')))
    
    def get_item_count(self, obj):
        return sum(line.quantity for line in self._lines(obj))


class AddToCartSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()
