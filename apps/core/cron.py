# apps/core/cron.py
import hmac
from functools import wraps

from django.conf import settings

from .api import error_response
from .exceptions import Unauthorized


def _presented_token(request) -> str:
    header = request.META.get('HTTP_AUTHORIZATION', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip()
    return request.GET.get('token', '')


def cron_secret_required(view):
    """Lets the call through only with CRON_SECRET as bearer token or ?token=."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        secret = settings.CRON_SECRET
        token = _presented_token(request)
        if not secret or not token or not hmac.compare_digest(token.encode(), secret.encode()):
            return error_response(Unauthorized())
        return view(request, *args, **kwargs)
    return wrapper
