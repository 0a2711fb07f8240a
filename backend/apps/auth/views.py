# apps/auth/views.py

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import update_last_login
from django.shortcuts import get_object_or_404
from rest_framework import generics, status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from .permissions import IsPlatformAdmin
from .serializers import (
    AdminUserSerializer, ChangePasswordSerializer, LogoutSerializer,
    PasswordResetRequestSerializer, PasswordResetSerializer, RoleUpdateSerializer,
    UserLoginSerializer, UserProfileSerializer, UserRegistrationSerializer,
)
from .services import AccountService
from .tokens import blacklist_token, create_tokens_for_user

User = get_user_model()
logger = logging.getLogger(__name__)


class LoginView(APIView):
    """JWT login by email and password"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            username=serializer.validated_data['email'].strip().lower(),
            password=serializer.validated_data['password']
        )
        if user is None:
            logger.info("Failed login attempt", extra={'email': serializer.validated_data['email']})
            return Response({
                'error': 'Invalid credentials'
            }, status=status.HTTP_400_BAD_REQUEST)

        update_last_login(None, user)

        return Response({
            'message': 'Login successful',
            'tokens': create_tokens_for_user(user),
            'user': UserProfileSerializer(user, context={'request': request}).data,
        }, status=status.HTTP_200_OK)


class UserRegistrationView(APIView):
    """User registration with JWT response"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AccountService().register(**serializer.validated_data)

        return Response({
            'message': 'User created successfully',
            'user': UserProfileSerializer(user, context={'request': request}).data,
            'tokens': create_tokens_for_user(user),
        }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
def logout(request):
    """Logout user by blacklisting refresh token"""
    serializer = LogoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    refresh_token = serializer.validated_data.get('refresh_token')
    if not refresh_token:
        return Response({
            'message': 'Logged out (no refresh token provided)'
        }, status=status.HTTP_200_OK)

    if not blacklist_token(refresh_token):
        return Response({
            'error': 'Logout failed: invalid refresh token'
        }, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Successfully logged out'
    }, status=status.HTTP_200_OK)


class UserProfileView(generics.RetrieveUpdateAPIView):
    """Get and update the signed-in user's profile"""
    serializer_class = UserProfileSerializer
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_object(self):
        return self.request.user


class ChangePasswordView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AccountService(request.user).change_password(request.user, **serializer.validated_data)
        return Response({'message': 'Password changed successfully'})


class PasswordResetRequestView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AccountService().request_password_reset(serializer.validated_data['email'])
        return Response({
            'message': 'If an account exists for this email, a password reset link has been sent.'
        })


class PasswordResetView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        AccountService().reset_password(data['uid'], data['token'], data['password'])
        return Response({'message': 'Password has been reset. You can now sign in.'})


class AdminUserListView(generics.ListAPIView):
    """All users, newest first"""
    serializer_class = AdminUserSerializer
    permission_classes = [IsPlatformAdmin]
    queryset = User.objects.order_by('-created_at')
    filterset_fields = ['role', 'is_active']
    search_fields = ['email', 'full_name', 'phone']


class AdminUserRoleView(APIView):
    permission_classes = [IsPlatformAdmin]

    def post(self, request, pk):
        target = get_object_or_404(User, pk=pk)
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AccountService(request.user).update_role(target, serializer.validated_data['role'])
        return Response({
            'message': 'User role updated successfully',
            'user': AdminUserSerializer(user).data,
        })
