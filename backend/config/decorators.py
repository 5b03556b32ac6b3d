"""
Custom decorators for database error handling
"""
import logging
from functools import wraps

from django.db.utils import DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def handle_database_errors(view_func):
    """
    Answer 503 JSON instead of a server error when the database fails mid-view
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except DatabaseError:
            logger.exception("Database error in %s", view_func.__name__)
            return JsonResponse({
                "success": False,
                "error": "Database temporarily unavailable",
                "message": "Please try again in a moment",
            }, status=503)

    return wrapper
