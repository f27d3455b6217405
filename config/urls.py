"""
URL configuration for the campus backend
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from django.views.generic import RedirectView
from django.conf import settings
from django.db import DatabaseError, connection
from django.views.static import serve
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)


@require_http_methods(["GET"])
def health_view(request):
    """Minimal health check for connectivity verification. No auth required."""
    return JsonResponse({'status': 'ok', 'service': 'llpmm-campus'})


@require_http_methods(["GET"])
def system_health_view(request):
    """Database connectivity check for monitoring. No auth required."""
    result = {'db': 'ok'}
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        result['db'] = f'error: {str(e)[:80]}'
    return JsonResponse(result, status=200 if result['db'] == 'ok' else 503)


@require_http_methods(["GET"])
def api_root(request):
    """Root endpoint - API information"""
    return JsonResponse({
        'name': 'LLPMM Online Campus API',
        'version': '1.0.0',
        'endpoints': {
            'health': '/api/health/',
            'admin': '/api/admin/',
            'instructor': '/api/instructor/',
            'student': '/api/student/',
            'docs': '/api/docs/',
            'schema': '/api/schema/',
        }
    })


urlpatterns = [
    path('', api_root, name='api-root'),
    path('admin', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api', RedirectView.as_view(url='/api/', permanent=False)),
    path('api/', api_root),
    path('api/health/', health_view, name='api-health'),
    path('api/system/health/', system_health_view, name='api-system-health'),

    # API Schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API endpoints
    path('api/admin/', include('courses.urls.admin')),
    path('api/instructor/', include('courses.urls.instructor')),
    path('api/student/', include('enrollments.urls.student')),
]

# Uploaded certificates (FileSystemStorage); production serves MEDIA_ROOT from the web server.
if settings.DEBUG:
    media_url_pattern = settings.MEDIA_URL.lstrip('/')
    urlpatterns += [
        path(f'{media_url_pattern}<path:path>', serve, {'document_root': settings.MEDIA_ROOT}),
    ]
