# apps/core/backends.py
import logging

from django.conf import settings
from django.contrib.auth.backends import RemoteUserBackend

logger = logging.getLogger(__name__)


class IdentityProviderBackend(RemoteUserBackend):
    """Creates the local user on the first authenticated request."""
    create_unknown_user = True

    def clean_username(self, username):
        return username.strip()

    def configure_user(self, request, user, created=True):
        email = request.META.get(settings.IDENTITY_EMAIL_HEADER, '') if request else ''
        if email and user.email != email.strip().lower():
            user.email = email.strip().lower()
            user.save(update_fields=['email'])
        if created:
            logger.info("Provisioned local user %s", user.username)
        return user
