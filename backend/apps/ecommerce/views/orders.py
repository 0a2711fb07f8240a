"""
Order views
Customers see their own orders, vendors the orders of their stores, admins everything
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..filters import OrderFilter
from ..serializers import (
    OrderDetailSerializer, OrderSerializer, OrderStatusUpdateSerializer, OrderTrackingSerializer,
)
from ..services import OrderService


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    
    filterset_class = OrderFilter
    search_fields = ['tracking_number', 'payment_reference']
    ordering_fields = ['created_at', 'total_amount']
    ordering = ['-created_at']
    
    def get_queryset(self):
        return OrderService(self.request.user).visible_orders()
    
    def get_serializer_class(self):
        if self.action in ['retrieve', 'update_status']:
            return OrderDetailSerializer
        return OrderSerializer
    
    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        """Advance the order; only the store owner or an admin may do this"""
        order = self.get_object()
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        order = OrderService(request.user).update_status(
            order,
            new_status=serializer.validated_data['status'],
            location=serializer.validated_data['location'],
            notes=serializer.validated_data['notes'],
        )
        return Response({
            'message': 'Order status updated',
            'order': self.get_serializer(order).data,
        })
    
    @action(detail=True, methods=['get'])
    def tracking(self, request, pk=None):
        order = self.get_object()
        events = OrderService(request.user).get_tracking(order)
        return Response({
            'tracking_number': order.tracking_number,
            'status': order.status,
            'tracking': OrderTrackingSerializer(events, many=True).data,
        })
