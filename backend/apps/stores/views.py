# apps/stores/views.py

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from apps.auth.permissions import IsOwnerOrAdmin, IsPlatformAdmin, IsVendor
from apps.ecommerce.serializers import ProductSerializer
from .models import Store, VendorUpgradeRequest, CashoutRequest
from .serializers import (
    CashoutRequestSerializer, ReviewDecisionSerializer, StoreActiveSerializer,
    StoreSerializer, VendorUpgradeRequestSerializer,
)
from .services import CashoutService, StoreService, VendorUpgradeService


class StoreViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.CreateModelMixin,
                   mixins.UpdateModelMixin,
                   viewsets.GenericViewSet):
    """
    Public store directory and vendor store management.

    Stores are addressed by name, case-insensitively.
    """

    serializer_class = StoreSerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    lookup_field = 'name'
    lookup_value_regex = '[^/]+'
    owner_field = 'owner'
    search_fields = ['name', 'description']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [permissions.AllowAny()]
        if self.action == 'create':
            return [IsVendor()]
        if self.action == 'mine':
            return [permissions.IsAuthenticated()]
        return [permissions.IsAuthenticated(), IsOwnerOrAdmin()]

    def get_queryset(self):
        queryset = Store.objects.select_related('owner')
        if self.action == 'list':
            return queryset.active()
        if self.action == 'retrieve':
            user = self.request.user
            if user.is_authenticated and user.is_platform_admin:
                return queryset
            if user.is_authenticated:
                return queryset.filter(Q(is_active=True) | Q(owner=user))
            return queryset.active()
        return queryset

    def get_object(self):
        queryset = self.filter_queryset(self.get_queryset())
        store = get_object_or_404(queryset, name__iexact=self.kwargs['name'].strip())
        self.check_object_permissions(self.request, store)
        return store

    def retrieve(self, request, *args, **kwargs):
        """Store page: the store and its active products, newest first"""
        store = self.get_object()
        products = store.products.filter(is_active=True).select_related('category').prefetch_related(
            'images'
        ).newest()

        return Response({
            'store': StoreSerializer(store, context=self.get_serializer_context()).data,
            'products': ProductSerializer(products, many=True, context=self.get_serializer_context()).data,
        })

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = StoreService(request.user).create_store(**serializer.validated_data)
        return Response(self.get_serializer(store).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        store = self.get_object()
        serializer = self.get_serializer(store, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        store = StoreService(request.user).update_store(store, **serializer.validated_data)
        return Response(self.get_serializer(store).data)

    @action(detail=False, methods=['get'])
    def mine(self, request):
        """Stores owned by the signed-in user"""
        stores = StoreService(request.user).list_my_stores()
        return Response(self.get_serializer(stores, many=True).data)


class VendorUpgradeRequestViewSet(mixins.ListModelMixin,
                                  mixins.CreateModelMixin,
                                  viewsets.GenericViewSet):
    """The signed-in user's vendor upgrade requests"""

    serializer_class = VendorUpgradeRequestSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return VendorUpgradeRequest.objects.filter(user=self.request.user).order_by('-created_at')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        upgrade_request = VendorUpgradeService(request.user).submit_request(**serializer.validated_data)
        return Response({
            'message': 'Vendor upgrade request submitted successfully!',
            'request': self.get_serializer(upgrade_request).data,
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def latest(self, request):
        upgrade_request = VendorUpgradeService(request.user).latest_request()
        data = self.get_serializer(upgrade_request).data if upgrade_request else None
        return Response({'request': data})


class CashoutRequestViewSet(mixins.ListModelMixin,
                            mixins.CreateModelMixin,
                            viewsets.GenericViewSet):
    """The signed-in vendor's cashout requests"""

    serializer_class = CashoutRequestSerializer
    permission_classes = [IsVendor]

    def get_queryset(self):
        return CashoutRequest.objects.filter(vendor=self.request.user).order_by('-created_at')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cashout = CashoutService(request.user).request_cashout(serializer.validated_data['amount'])
        return Response(self.get_serializer(cashout).data, status=status.HTTP_201_CREATED)


class AdminStoreViewSet(viewsets.ReadOnlyModelViewSet):
    """Every store, active or not"""

    serializer_class = StoreSerializer
    permission_classes = [IsPlatformAdmin]
    queryset = Store.objects.select_related('owner').order_by('-created_at')
    filterset_fields = ['is_active', 'owner']
    search_fields = ['name']

    @action(detail=True, methods=['post'], url_path='toggle-active')
    def toggle_active(self, request, pk=None):
        """Set is_active, or flip it when no value is given"""
        store = self.get_object()
        serializer = StoreActiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        is_active = serializer.validated_data.get('is_active', not store.is_active)
        store = StoreService(request.user).set_active(store, is_active)
        return Response(self.get_serializer(store).data)


class AdminVendorUpgradeRequestViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = VendorUpgradeRequestSerializer
    permission_classes = [IsPlatformAdmin]

    def get_queryset(self):
        return VendorUpgradeService(self.request.user).list_requests(self.request.query_params.get('status'))

    @action(detail=True, methods=['post'])
    def review(self, request, pk=None):
        serializer = ReviewDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        upgrade_request = VendorUpgradeService(request.user).review_request(
            pk, serializer.validated_data['approve']
        )
        return Response(self.get_serializer(upgrade_request).data)


class AdminCashoutRequestViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = CashoutRequestSerializer
    permission_classes = [IsPlatformAdmin]

    def get_queryset(self):
        return CashoutService(self.request.user).list_requests(self.request.query_params.get('status'))

    @action(detail=True, methods=['post'])
    def review(self, request, pk=None):
        serializer = ReviewDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cashout = CashoutService(request.user).review_cashout(pk, serializer.validated_data['approve'])
        return Response(self.get_serializer(cashout).data)
