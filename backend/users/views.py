"""Sign-in views"""

import json
import logging

from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods
from django_ratelimit.decorators import ratelimit

from .forms import LoginForm
from .models import User

logger = logging.getLogger(__name__)

NO_ACCOUNT_MESSAGE = (
    "No account found with this email address. "
    "Please check your email or create a new account."
)
BAD_PASSWORD_MESSAGE = (
    "Incorrect password. Please try again or use the forgot password option."
)


def post_login_redirect(request, user):
    """The safe `from` target when given, otherwise the user's role dashboard"""
    next_url = request.GET.get("from", "")
    if next_url and url_has_allowed_host_and_scheme(
        url=next_url,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return next_url
    return user.get_dashboard_url()


@ratelimit(key="ip", rate="10/h", method="POST")
@require_http_methods(["POST"])
def user_login(request):
    """User login (JSON or form encoded)"""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            data = {}
    else:
        data = request.POST

    form = LoginForm(data)
    if not form.is_valid():
        errors = {field: messages[0] for field, messages in form.errors.items()}
        return JsonResponse({"success": False, "errors": errors}, status=400)

    email = form.cleaned_data["email"]
    user = authenticate(request, username=email, password=form.cleaned_data["password"])
    if user is None:
        if User.objects.filter(email__iexact=email).exists():
            message = BAD_PASSWORD_MESSAGE
        else:
            message = NO_ACCOUNT_MESSAGE
        logger.info("Failed sign-in for %s", email)
        return JsonResponse({"success": False, "errors": {"root": message}}, status=400)

    login(request, user)
    return JsonResponse({"success": True, "redirect": post_login_redirect(request, user)})


@require_http_methods(["POST"])
def user_logout(request):
    """User logout"""
    logout(request)
    return JsonResponse({"success": True})
