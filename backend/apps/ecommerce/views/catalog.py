"""
Catalog views: home feed, search, categories, products and reviews
"""

from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth.permissions import IsOwnerOrAdmin, IsPlatformAdmin, IsVendor
from apps.stores.serializers import StoreSerializer
from ..filters import ProductFilter
from ..models import Category, Product
from ..serializers import (
    CategorySerializer, ProductActiveSerializer, ProductDetailSerializer,
    ProductSerializer, ReviewSerializer,
)
from ..services import CatalogService


class HomeFeedView(APIView):
    """Newest products and categories for the storefront home page"""
    permission_classes = [permissions.AllowAny]
    
    def get(self, request):
        feed = CatalogService().home_feed()
        context = {'request': request}
        return Response({
            'products': ProductSerializer(feed['products'], many=True, context=context).data,
            'categories': CategorySerializer(feed['categories'], many=True, context=context).data,
        })


class SearchView(APIView):
    """Search products, categories and stores by name"""
    permission_classes = [permissions.AllowAny]
    
    def get(self, request):
        query = request.query_params.get('q', '')
        results = CatalogService().search(query)
        context = {'request': request}
        return Response({
            'query': query.strip(),
            'products': ProductSerializer(results['products'], many=True, context=context).data,
            'categories': CategorySerializer(results['categories'], many=True, context=context).data,
            'stores': StoreSerializer(results['stores'], many=True, context=context).data,
        })


class CategoryViewSet(mixins.ListModelMixin,
                      mixins.RetrieveModelMixin,
                      mixins.CreateModelMixin,
                      mixins.DestroyModelMixin,
                      viewsets.GenericViewSet):
    """
    Categories are public to read and managed by admins.
    Detail routes address a category by name, case-insensitively.
    """
    
    queryset = Category.objects.order_by('-created_at')
    serializer_class = CategorySerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    lookup_field = 'name'
    lookup_value_regex = '[^/]+'
    pagination_class = None
    
    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [permissions.AllowAny()]
        return [IsPlatformAdmin()]
    
    def get_object(self):
        return CatalogService().get_category_by_name(self.kwargs['name'])
    
    def retrieve(self, request, *args, **kwargs):
        """Category page: the category and its active products, newest first"""
        service = CatalogService()
        category = service.get_category_by_name(kwargs['name'])
        products = service.category_products(category)
        context = self.get_serializer_context()
        return Response({
            'category': CategorySerializer(category, context=context).data,
            'products': ProductSerializer(products, many=True, context=context).data,
        })
    
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        category = CatalogService(request.user).create_category(**serializer.validated_data)
        return Response(self.get_serializer(category).data, status=status.HTTP_201_CREATED)
    
    def perform_destroy(self, instance):
        CatalogService(self.request.user).delete_category(instance)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Storefront products.
    
    Anyone can browse active products. Vendors add products to their own stores;
    the store owner or an admin edits and deletes them.
    """
    
    serializer_class = ProductSerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filterset_class = ProductFilter
    search_fields = ['name', 'description']
    ordering_fields = ['price', 'created_at', 'name']
    ordering = ['-created_at']
    owner_field = 'store.owner'
    
    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [permissions.AllowAny()]
        if self.action == 'reviews':
            return [permissions.IsAuthenticated()]
        if self.action in ['create', 'mine']:
            return [IsVendor()]
        return [IsVendor(), IsOwnerOrAdmin()]
    
    def get_queryset(self):
        queryset = Product.objects.select_related('store', 'category').prefetch_related('images')
        if self.action in ['list', 'retrieve', 'reviews']:
            return queryset.active()
        if self.action == 'mine':
            return queryset.filter(store__owner=self.request.user)
        return queryset
    
    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ProductDetailSerializer
        if self.action == 'reviews':
            return ReviewSerializer
        return ProductSerializer
    
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        data = dict(serializer.validated_data)
        images = data.pop('uploaded_images', None)
        store = data.pop('store')
        product = CatalogService(request.user).create_product(store, images=images, **data)
        return Response(self.get_serializer(product).data, status=status.HTTP_201_CREATED)
    
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        product = self.get_object()
        serializer = self.get_serializer(product, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        
        data = dict(serializer.validated_data)
        images = data.pop('uploaded_images', None)
        product = CatalogService(request.user).update_product(product, images=images, **data)
        return Response(self.get_serializer(product).data)
    
    def perform_destroy(self, instance):
        CatalogService(self.request.user).delete_product(instance)
    
    @action(detail=False, methods=['get'])
    def mine(self, request):
        """Every product of the signed-in vendor's stores, listed or not"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)
    
    @action(detail=True, methods=['get', 'post'])
    def reviews(self, request, pk=None):
        """List a product's reviews or add one"""
        product = self.get_object()
        if request.method == 'GET':
            reviews = product.reviews.select_related('customer').order_by('-created_at')
            return Response(self.get_serializer(reviews, many=True).data)
        
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = CatalogService(request.user).add_review(product.pk, **serializer.validated_data)
        return Response(self.get_serializer(review).data, status=status.HTTP_201_CREATED)


class AdminProductViewSet(viewsets.ReadOnlyModelViewSet):
    """Every product, listed or not"""
    
    serializer_class = ProductSerializer
    permission_classes = [IsPlatformAdmin]
    queryset = Product.objects.select_related('store', 'category').prefetch_related('images').order_by('-created_at')
    filterset_fields = ['is_active', 'store', 'category']
    search_fields = ['name']
    
    @action(detail=True, methods=['post'], url_path='toggle-active')
    def toggle_active(self, request, pk=None):
        """Set is_active, or flip it when no value is given"""
        product = self.get_object()
        serializer = ProductActiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        is_active = serializer.validated_data.get('is_active', not product.is_active)
        product = CatalogService(request.user).set_product_active(product, is_active)
        return Response(self.get_serializer(product).data)
