"""
Checkout and payment views
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth.permissions import IsPlatformAdmin
from ..serializers import (
    CheckoutSerializer, OrderSerializer, PaymentTransactionSerializer, VerifyPaymentSerializer,
)
from ..services import CheckoutService, PaymentService


def payment_payload(payment):
    orders = payment.orders.select_related('store', 'customer').prefetch_related('items')
    return {
        'payment': PaymentTransactionSerializer(payment).data,
        'orders': OrderSerializer(orders, many=True).data,
    }


class CheckoutView(APIView):
    """
    Place one order per store from the cart and start the payment.
    The client redirects the customer to `authorization_url`.
    """
    
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        result = CheckoutService(request.user).checkout(
            shipping=serializer.validated_data['shipping'],
            payment_method=serializer.validated_data['payment_method'],
        )
        return Response({
            'message': 'Order placed successfully',
            'reference': result['reference'],
            'payment_method': result['payment_method'],
            'authorization_url': result['authorization_url'],
            'total_amount': str(result['total_amount']),
            'orders': OrderSerializer(result['orders'], many=True, context={'request': request}).data,
        }, status=status.HTTP_201_CREATED)


class VerifyPaymentView(APIView):
    """Confirm a payment with its provider after the customer returns from checkout"""
    
    def post(self, request):
        serializer = VerifyPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        
        service = PaymentService(request.user)
        payment = service.verify(serializer.validated_data['reference'])
        return Response(payment_payload(payment))
    

class PaymentDetailView(APIView):
    
    def get(self, request, reference):
        payment = PaymentService(request.user).get_transaction(reference)
        return Response(payment_payload(payment))


class AdminConfirmWhatsAppPaymentView(APIView):
    """Admin confirmation that a WhatsApp payment was received"""
    permission_classes = [IsPlatformAdmin]
    
    def post(self, request, reference):
        payment = PaymentService(request.user).mark_whatsapp_paid(reference)
        return Response({
            'message': 'Payment confirmed',
            **payment_payload(payment),
        })
