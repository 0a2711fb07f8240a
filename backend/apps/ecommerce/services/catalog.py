"""
Catalog service
Categories, products, product images, reviews, home feed and search
"""

from typing import Dict, List, Optional

from django.conf import settings
from django.db import transaction

from apps.core.services import BaseService, ValidationError, NotFoundError, PermissionError
from apps.stores.models import Store
from ..models import Category, Product, ProductImage, Review


class CatalogService(BaseService):
    """Service for browsing and managing the catalog"""

    # Browsing

    def home_feed(self) -> Dict:
        limits = settings.MARKETPLACE
        return {
            'products': list(
                Product.objects.active().select_related('store', 'category').prefetch_related('images')
                .newest()[:limits['HOME_PRODUCT_LIMIT']]
            ),
            'categories': list(Category.objects.order_by('-created_at')[:limits['HOME_CATEGORY_LIMIT']]),
        }

    def search(self, query: str) -> Dict:
        """Products, categories and stores whose names contain the query"""
        query = (query or '').strip()
        if not query:
            return {'products': [], 'categories': [], 'stores': []}

        limits = settings.MARKETPLACE
        return {
            'products': list(
                Product.objects.active().search(query).select_related('store', 'category')
                .prefetch_related('images').newest()[:limits['SEARCH_PRODUCT_LIMIT']]
            ),
            'categories': list(
                Category.objects.filter(name__icontains=query).order_by('-created_at')[:limits['SEARCH_CATEGORY_LIMIT']]
            ),
            'stores': list(
                Store.objects.active().filter(name__icontains=query).order_by('-created_at')[:limits['SEARCH_STORE_LIMIT']]
            ),
        }

    def get_category_by_name(self, name: str) -> Category:
        category = Category.objects.filter(name__iexact=(name or '').strip()).first()
        if category is None:
            raise NotFoundError("Category not found", details={'name': name})
        return category

    def category_products(self, category: Category):
        return Product.objects.active().filter(category=category).select_related('store').prefetch_related(
            'images'
        ).newest()

    def get_active_product(self, product_id) -> Product:
        product = Product.objects.active().select_related('store', 'category').filter(pk=product_id).first()
        if product is None:
            raise NotFoundError("Product not found")
        return product

    # Categories (admin)

    def create_category(self, name: str, description: str = '', image=None) -> Category:
        name = self.sanitize_string(name, 100)
        if not name:
            raise ValidationError("Category name is required")
        if Category.objects.filter(name__iexact=name).exists():
            raise ValidationError("A category with this name already exists", details={'name': name})

        category = Category.objects.create(name=name, description=self.sanitize_string(description), image=image)
        self.create_audit_log('create_category', 'category', category.pk, {'name': name})
        return category

    def delete_category(self, category: Category):
        category_id = category.pk
        category.delete()
        self.create_audit_log('delete_category', 'category', category_id)

    # Products (store owners and admins)

    def _check_store_access(self, store):
        if not (self.user.is_platform_admin or store.owner_id == self.user.pk):
            raise PermissionError("You can only manage products of your own stores")

    def _add_images(self, product: Product, images: List):
        start = product.images.count()
        ProductImage.objects.bulk_create([
            ProductImage(product=product, image=image, position=start + index)
            for index, image in enumerate(images)
        ])

    @transaction.atomic
    def create_product(self, store, images: Optional[List] = None, **data) -> Product:
        self._check_store_access(store)
        self.validate_required_fields(data, ['name', 'price'])

        product = Product.objects.create(store=store, **data)
        if images:
            self._add_images(product, images)

        self.log_info(f"Product '{product.name}' added to {store.name}", {'product_id': product.pk})
        return product

    @transaction.atomic
    def update_product(self, product: Product, images: Optional[List] = None, **data) -> Product:
        self._check_store_access(product.store)
        if 'store' in data and data['store'] != product.store:
            self._check_store_access(data['store'])

        for field, value in data.items():
            setattr(product, field, value)
        product.save()
        if images:
            self._add_images(product, images)

        self.log_info(f"Product '{product.name}' updated", {'product_id': product.pk, 'fields': list(data)})
        return product

    def delete_product(self, product: Product):
        self._check_store_access(product.store)
        product_id = product.pk
        product.delete()
        self.log_info("Product deleted", {'product_id': product_id})

    def set_product_active(self, product: Product, is_active: bool) -> Product:
        """Admin action: list or unlist a product"""
        product.is_active = is_active
        product.save(update_fields=['is_active', 'updated_at'])
        self.create_audit_log('set_product_active', 'product', product.pk, {'is_active': is_active})
        return product

    # Reviews

    def add_review(self, product_id, rating, comment: str = '') -> Review:
        product = self.get_active_product(product_id)
        try:
            rating = int(rating)
        except (TypeError, ValueError):
            raise ValidationError("Rating must be between 1 and 5")
        if not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")

        review = Review.objects.create(
            product=product,
            customer=self.user,
            rating=rating,
            comment=self.sanitize_string(comment),
        )
        self.log_info(f"Review added to {product.name}", {'review_id': review.pk, 'rating': rating})
        return review
