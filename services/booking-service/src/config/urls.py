# services/booking-service/src/config/urls.py
"""
Booking Service URL Configuration
"""

from django.contrib import admin
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import path, include


def health_check(request):
    """Basic health check endpoint."""
    return JsonResponse({
        'status': 'healthy',
        'service': 'booking-service',
        'version': '1.0.0'
    })


def readiness_check(request):
    """Readiness check with database and cache connectivity."""
    checks = {}

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        checks['database'] = 'connected'
    except DatabaseError as e:
        checks['database'] = f'error: {e}'

    try:
        cache.set('readiness_probe', 'ok', 5)
        checks['cache'] = 'connected' if cache.get('readiness_probe') == 'ok' else 'error: read mismatch'
    except Exception as e:
        checks['cache'] = f'error: {e}'

    is_ready = all(value == 'connected' for value in checks.values())

    return JsonResponse({
        'status': 'ready' if is_ready else 'not_ready',
        'service': 'booking-service',
        'checks': checks,
    }, status=200 if is_ready else 503)


urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health_check'),
    path('health/ready/', readiness_check, name='readiness_check'),
    path('api/v1/', include('apps.api.urls', namespace='api')),
]
