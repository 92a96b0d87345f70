"""
Bearer token authentication.

The session collaborator is DRF's ``authtoken`` store: a client sends
``Authorization: Bearer <token>`` and the token resolves to a user.
Unlike DRF's stock class a token that does not resolve (unknown,
expired, inactive user, malformed header) does not fail the request;
the request simply stays anonymous and the permission layer decides
whether that is acceptable.  Reads therefore never fail because of a
stale token, while writes still answer 401.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework import authentication, exceptions

logger = logging.getLogger(__name__)


class BearerTokenAuthentication(authentication.TokenAuthentication):
    """Token authentication using the ``Bearer`` keyword."""

    keyword = 'Bearer'

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except exceptions.AuthenticationFailed as exc:
            logger.info('Unresolvable bearer token on %s %s: %s', request.method, request.path, exc.detail)
            return None

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        ttl_hours = getattr(settings, 'AUTH_TOKEN_TTL_HOURS', 0)
        if ttl_hours and token.created < timezone.now() - timedelta(hours=ttl_hours):
            raise exceptions.AuthenticationFailed('Token has expired.')
        return user, token
