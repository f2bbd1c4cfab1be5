# apps/core/middleware.py
from django.conf import settings
from django.contrib.auth.middleware import RemoteUserMiddleware


class IdentityProviderMiddleware(RemoteUserMiddleware):
    """Trusts the user name forwarded by the identity provider proxy."""
    header = settings.IDENTITY_USER_HEADER
