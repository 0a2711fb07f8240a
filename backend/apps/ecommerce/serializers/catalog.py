"""
Catalog serializers: categories, products, images and reviews
"""

from rest_framework import serializers

from apps.core.utils import format_naira
from apps.stores.models import Store
from apps.stores.serializers import StoreSummarySerializer
from ..models import Category, Product, ProductImage, Review


class CategorySerializer(serializers.ModelSerializer):
    """Serializer for categories"""
    
    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'image', 'created_at']
        read_only_fields = ['id', 'created_at']


class ProductImageSerializer(serializers.ModelSerializer):
    """Serializer for product images"""
    
    class Meta:
        model = ProductImage
        fields = ['id', 'image', 'position']
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """
    Product listing and write serializer.
    
    Writes take `store_id` and optional `uploaded_images`; reads embed the store
    summary and the stored images.
    """
    
    store = StoreSummarySerializer(read_only=True)
    store_id = serializers.PrimaryKeyRelatedField(
        queryset=Store.objects.all(), source='store', write_only=True
    )
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    images = ProductImageSerializer(many=True, read_only=True)
    uploaded_images = serializers.ListField(
        child=serializers.ImageField(), write_only=True, required=False
    )
    price_formatted = serializers.SerializerMethodField()
    in_stock = serializers.ReadOnlyField()
    
    class Meta:
        model = Product
        fields = [
            'id', 'store', 'store_id', 'category', 'category_name', 'name', 'description',
            'price', 'price_formatted', 'stock_quantity', 'in_stock', 'is_active',
            'images', 'uploaded_images', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
    
    def get_price_formatted(self, obj):
        return format_naira(obj.price)


class ReviewSerializer(serializers.ModelSerializer):
    """Serializer for product reviews"""
    
    customer_name = serializers.CharField(source='customer.full_name', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    
    class Meta:
        model = Review
        fields = ['id', 'product', 'product_name', 'customer_name', 'rating', 'comment', 'created_at']
        read_only_fields = ['id', 'product', 'product_name', 'customer_name', 'created_at']


class ProductDetailSerializer(ProductSerializer):
    """Product page: adds reviews, newest first, and the average rating"""
    
    reviews = serializers.SerializerMethodField()
    average_rating = serializers.ReadOnlyField()
    review_count = serializers.SerializerMethodField()
    
    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ['reviews', 'average_rating', 'review_count']
    
    def get_reviews(self, obj):
        reviews = obj.reviews.select_related('customer').order_by('-created_at')
        return ReviewSerializer(reviews, many=True, context=self.context).data
    
    def get_review_count(self, obj):
        return obj.reviews.count()


class ProductActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField(required=False)
