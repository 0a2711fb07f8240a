"""
Dashboard views
"""

from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth.permissions import IsPlatformAdmin
from apps.stores.serializers import CashoutRequestSerializer, StoreSerializer
from ..serializers import CategorySerializer, OrderSerializer, ReviewSerializer
from ..services import DashboardService


class CustomerDashboardView(APIView):
    """The signed-in user's orders, plus their stores when they sell"""
    
    def get(self, request):
        data = DashboardService(request.user).customer_dashboard()
        context = {'request': request}
        return Response({
            'role': data['role'],
            'orders': OrderSerializer(data['orders'], many=True, context=context).data,
            'stores': StoreSerializer(data['stores'], many=True, context=context).data,
        })


class VendorDashboardView(APIView):
    
    def get(self, request):
        data = DashboardService(request.user).vendor_dashboard()
        context = {'request': request}
        summary = data['summary']
        return Response({
            'stores': StoreSerializer(data['stores'], many=True, context=context).data,
            'orders': OrderSerializer(data['orders'], many=True, context=context).data,
            'cashout_requests': CashoutRequestSerializer(data['cashout_requests'], many=True).data,
            'reviews': ReviewSerializer(data['reviews'], many=True).data,
            'summary': {
                'total_revenue': str(summary['total_revenue']),
                'pending_orders': summary['pending_orders'],
                'product_count': summary['product_count'],
                'available_balance': str(summary['available_balance']),
            },
        })


class AdminDashboardView(APIView):
    permission_classes = [IsPlatformAdmin]
    
    def get(self, request):
        data = DashboardService(request.user).admin_dashboard()
        return Response({
            'categories': CategorySerializer(data['categories'], many=True, context={'request': request}).data,
            'total_products': data['total_products'],
            'total_orders': data['total_orders'],
            'total_users': data['total_users'],
            'total_revenue': str(data['total_revenue']),
        })
