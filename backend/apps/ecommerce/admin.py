# apps/ecommerce/admin.py

"""
Django admin configuration for e-commerce models
"""

from django.contrib import admin

from .models import (
    Category, Product, ProductImage, Review,
    Cart, CartItem,
    Order, OrderItem, OrderTracking,
    PaymentTransaction,
)


# ============================================================================
# CATALOG ADMIN
# ============================================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    fields = ('image', 'position')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin for products"""
    
    list_display = ('name', 'store', 'category', 'price', 'stock_quantity', 'is_active', 'created_at')
    list_filter = ('is_active', 'category', 'store')
    search_fields = ('name', 'description', 'store__name')
    list_editable = ('is_active',)
    raw_id_fields = ('store',)
    inlines = [ProductImageInline]


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('product', 'customer', 'rating', 'created_at')
    list_filter = ('rating',)
    search_fields = ('product__name', 'customer__email', 'comment')
    raw_id_fields = ('product', 'customer')


# ============================================================================
# CART ADMIN
# ============================================================================

class CartItemInline(admin.TabularInline):
    """Inline for cart items"""
    model = CartItem
    extra = 0
    fields = ('product', 'quantity')
    raw_id_fields = ('product',)


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ('user', 'item_count', 'updated_at')
    search_fields = ('user__email',)
    inlines = [CartItemInline]


# ============================================================================
# ORDER ADMIN
# ============================================================================

class OrderItemInline(admin.TabularInline):
    """Inline for order items"""
    model = OrderItem
    extra = 0
    fields = ('product', 'product_name', 'quantity', 'price', 'line_total')
    readonly_fields = ('line_total',)


class OrderTrackingInline(admin.TabularInline):
    model = OrderTracking
    extra = 0
    fields = ('status', 'location', 'notes', 'created_at')
    readonly_fields = ('created_at',)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders"""
    
    list_display = (
        'tracking_number', 'customer', 'store', 'total_amount', 'status',
        'payment_method', 'payment_status', 'created_at'
    )
    list_filter = ('status', 'payment_status', 'payment_method', 'created_at')
    search_fields = ('tracking_number', 'payment_reference', 'customer__email', 'store__name')
    readonly_fields = ('tracking_number', 'payment_reference', 'vendor_credited', 'created_at', 'updated_at')
    raw_id_fields = ('customer', 'store')
    date_hierarchy = 'created_at'
    inlines = [OrderItemInline, OrderTrackingInline]


@admin.register(PaymentTransaction)
class PaymentTransactionAdmin(admin.ModelAdmin):
    list_display = ('reference', 'provider', 'customer', 'amount', 'status', 'created_at')
    list_filter = ('provider', 'status')
    search_fields = ('reference', 'customer__email')
    readonly_fields = ('provider_response', 'authorization_url', 'created_at', 'updated_at')
