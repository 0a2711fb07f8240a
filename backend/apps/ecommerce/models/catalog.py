# apps/ecommerce/models/catalog.py

"""
Catalog models: categories, products, product images and reviews
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Avg, Q

from apps.core.models import TimeStampedModel
from apps.core.utils import RandomUploadPath
from .managers import ProductQuerySet


class Category(models.Model):
    """Product category, looked up by name"""
    
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    image = models.ImageField(upload_to=RandomUploadPath('categories'), null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        ordering = ['-created_at']
        verbose_name_plural = 'Categories'
    
    def __str__(self):
        return self.name


class Product(TimeStampedModel):
    """A product sold by one store"""
    
    store = models.ForeignKey('stores.Store', on_delete=models.CASCADE, related_name='products')
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products'
    )
    name = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    stock_quantity = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True, db_index=True)
    
    objects = ProductQuerySet.as_manager()
    
    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(condition=Q(stock_quantity__gte=0), name='product_stock_non_negative'),
            models.CheckConstraint(condition=Q(price__gte=0), name='product_price_non_negative'),
        ]
        indexes = [
            models.Index(fields=['is_active', '-created_at']),
        ]
    
    def __str__(self):
        return self.name
    
    @property
    def in_stock(self):
        return self.stock_quantity > 0
    
    @property
    def average_rating(self):
        """Mean review rating rounded to one decimal, None without reviews"""
        average = self.reviews.aggregate(average=Avg('rating'))['average']
        return round(average, 1) if average is not None else None


class ProductImage(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='images')
    image = models.ImageField(upload_to=RandomUploadPath('products'))
    position = models.PositiveIntegerField(default=0)
    
    class Meta:
        ordering = ['position', 'id']
    
    def __str__(self):
        return f"Image {self.position} of {self.product}"


class Review(models.Model):
    """Customer review of a product"""
    
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='reviews')
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='reviews'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(condition=Q(rating__gte=1) & Q(rating__lte=5), name='review_rating_range'),
        ]
    
    def __str__(self):
        return f"{self.rating}/5 for {self.product} by {self.customer}"
