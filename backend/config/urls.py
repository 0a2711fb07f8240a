# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def api_root(request):
    """
    API Root endpoint
    """
    return Response({
        'message': 'Welcome to the LuxePlus Marketplace API',
        'version': '1.0.0',
        'status': 'operational',
        'documentation': {
            'swagger': request.build_absolute_uri('/api/docs/'),
            'redoc': request.build_absolute_uri('/api/redoc/'),
            'schema': request.build_absolute_uri('/api/schema/')
        },
        'endpoints': {
            'auth': request.build_absolute_uri('/api/v1/auth/'),
            'stores': request.build_absolute_uri('/api/v1/stores/'),
            'ecommerce': request.build_absolute_uri('/api/v1/ecommerce/'),
        },
        'quick_start': {
            'register': 'POST /api/v1/auth/register/',
            'login': 'POST /api/v1/auth/login/',
            'checkout': 'POST /api/v1/ecommerce/checkout/',
            'health_check': 'GET /health/'
        }
    })


urlpatterns = [
    path('', api_root, name='api_root'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # Authentication & profiles
    path('api/v1/auth/', include('apps.auth.urls')),

    # Marketplace
    path('api/v1/ecommerce/', include('apps.ecommerce.urls')),
    path('api/v1/', include('apps.stores.urls')),

    # Health Check
    path('health/', include('apps.core.health_urls')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

    # Add debug toolbar in development
    if 'debug_toolbar' in settings.INSTALLED_APPS:
        import debug_toolbar
        urlpatterns = [
            path('__debug__/', include(debug_toolbar.urls)),
        ] + urlpatterns
