"""
Custom middleware for database connection handling
"""
import logging
import time

from django.conf import settings
from django.db import connection
from django.db.utils import OperationalError
from django.http import HttpResponse, JsonResponse

logger = logging.getLogger(__name__)

UNAVAILABLE_PAGE = """<!DOCTYPE html>
<html>
<head><title>Service Temporarily Unavailable</title></head>
<body>
    <h1>We'll be right back!</h1>
    <p>Our database is taking a quick nap. Your listing drafts are safe.</p>
    <p>Please try refreshing the page in a moment.</p>
    <button onclick="location.reload()">Retry Now</button>
</body>
</html>
"""


class DatabaseHealthCheckMiddleware:
    """
    Retry the database connection with backoff before handling a request
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not self._ensure_database_connection():
            return self._database_error_response(request)
        return self.get_response(request)

    def _ensure_database_connection(self):
        """
        True once a connection is available, False after the last retry fails
        """
        attempts = settings.DATABASE_RETRY_ATTEMPTS
        for attempt in range(attempts):
            try:
                connection.ensure_connection()
                return True
            except OperationalError:
                if attempt == attempts - 1:
                    logger.error("Database connection failed after %d attempts", attempts)
                    return False

                delay = settings.DATABASE_RETRY_DELAYS[attempt]
                logger.warning(
                    "Database connection attempt %d failed, retrying in %ss", attempt + 1, delay
                )
                time.sleep(delay)

        return False

    def _database_error_response(self, request):
        """
        JSON for API and AJAX callers, a small HTML page for browsers
        """
        wants_json = (
            request.path.startswith("/api/")
            or request.headers.get("X-Requested-With") == "XMLHttpRequest"
            or request.content_type == "application/json"
        )
        if wants_json:
            return JsonResponse({
                "success": False,
                "error": "Database temporarily unavailable",
                "message": "Please try again in a moment",
            }, status=503)
        return HttpResponse(UNAVAILABLE_PAGE, status=503)
