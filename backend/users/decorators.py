"""Access decorators for listing management views"""

from functools import wraps

from django.http import JsonResponse


def service_provider_required(view_func):
    """Refuse listing management to accounts that cannot list facilities"""

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.can_create_listing():
            return JsonResponse(
                {"success": False, "error": "Only service providers can manage listings"},
                status=403,
            )
        return view_func(request, *args, **kwargs)

    return wrapper
