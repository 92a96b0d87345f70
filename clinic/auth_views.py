"""
Session endpoints.

``login`` exchanges a username/password for the bearer token that the
write endpoints expect; ``logout`` revokes it.  Tokens live in DRF's
``authtoken`` table, see :mod:`clinic.authentication`.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import authenticate
from django.utils import timezone
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.exceptions import ApiError
from clinic.serializers.auth import LoginSerializer
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


def _issue_token(user) -> Token:
    """Return the user's token, rotating it if it has outlived the TTL."""
    token, created = Token.objects.get_or_create(user=user)
    ttl_hours = settings.AUTH_TOKEN_TTL_HOURS
    if not created and ttl_hours and token.created < timezone.now() - timedelta(hours=ttl_hours):
        token.delete()
        token = Token.objects.create(user=user)
    return token


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']

    user = authenticate(request, username=username, password=s.validated_data['password'])
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': request.META.get('REMOTE_ADDR')})
        logger.info('Failed login for %s', username)
        raise ApiError('INVALID_CREDENTIALS', 'Invalid username or password', status_code=401)

    token = _issue_token(user)
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    payload: dict[str, object] = {
        'token': token.key,
        'tokenType': 'Bearer',
        'user': {
            'id': user.id,
            'username': user.username,
            'name': user.get_full_name() or user.username,
        },
    }
    if settings.AUTH_TOKEN_TTL_HOURS:
        expires_at = token.created + timedelta(hours=settings.AUTH_TOKEN_TTL_HOURS)
        payload['expiresAt'] = expires_at.isoformat()
    return Response(payload)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    if isinstance(request.auth, Token):
        request.auth.delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id)
    return Response({'message': 'Logged out'})
