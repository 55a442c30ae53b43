# apps/core/views.py

import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps import __version__
from .auth_service import auth_service
from .models import Usuario
from .utils import error_response, parse_json_body

logger = logging.getLogger(__name__)


@require_GET
def api_index(request):
    """
    Landing endpoint listing what the API offers
    """
    return JsonResponse({
        'name': 'Student Project Monitor',
        'version': __version__,
        'endpoints': [
            'POST /register',
            'POST /login',
            'POST /logout',
            'GET /projects',
            'POST /add-project',
            'DELETE /delete-project/<id>',
            'GET /health/',
        ],
    })


@csrf_exempt
@require_POST
def register_view(request):
    """
    Creates an account

    The view only maps HTTP to the service; validation lives in
    ``AuthenticationService.register``.
    """
    data = parse_json_body(request)
    status, message, usuario = auth_service.register(data)

    if usuario is None:
        return error_response(message, status)

    return JsonResponse({
        'message': message,
        'user': usuario.to_public_dict(),
    }, status=status)


@csrf_exempt
@require_POST
def login_view(request):
    """
    Logs a user in and returns the public user record
    """
    data = parse_json_body(request)
    status, message, usuario = auth_service.login(
        request, data.get('username'), data.get('password')
    )

    if usuario is None:
        return error_response(message, status)

    return JsonResponse({
        'message': message,
        'user': usuario.to_public_dict(),
    }, status=status)


@csrf_exempt
@require_POST
def logout_view(request):
    if auth_service.logout(request):
        return JsonResponse({'message': 'Logged out'})
    return error_response('Logout failed', 500)


@require_GET
def health_check(request):
    """
    Health check for monitoring
    """
    try:
        # Database round trip
        Usuario.objects.count()

        from django.core.cache import cache
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        return JsonResponse({
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        })

    except Exception as e:
        logger.exception("Health check failed")
        return JsonResponse({
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        }, status=500)
