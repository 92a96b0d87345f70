from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from clinic.models import AuditEvent, Patient

pytestmark = pytest.mark.django_db

PATIENT = {'name': 'Simran Kaur', 'age': 32, 'village': 'Bhadson'}


def login(client, username, password):
    return client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')


def test_login_issues_bearer_token(user):
    client = APIClient()
    r = login(client, ' asha ', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['tokenType'] == 'Bearer'
    assert r.data['user'] == {'id': user.id, 'username': 'asha', 'name': 'Asha Worker'}
    assert 'expiresAt' in r.data
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    assert client.post('/api/patients', PATIENT, format='json').status_code == 201

    # same token until it expires
    assert login(APIClient(), 'asha', 'P@ssw0rd1').data['token'] == r.data['token']
    assert AuditEvent.objects.filter(action='login', user=user).count() == 2


def test_login_rejects_bad_password(user):
    r = login(APIClient(), 'asha', 'wrong')
    assert r.status_code == 401
    assert r.data['code'] == 'INVALID_CREDENTIALS'
    event = AuditEvent.objects.get(action='login')
    assert event.user is None
    assert event.detail['result'] == 'fail'


def test_login_requires_both_fields(db):
    r = APIClient().post(reverse('login_view'), {'username': 'asha'}, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'VALIDATION_ERROR'


def test_logout_revokes_token(client, token):
    r = client.post(reverse('logout_view'))
    assert r.status_code == 200
    assert not Token.objects.filter(key=token.key).exists()
    r = client.post('/api/patients', PATIENT, format='json')
    assert r.status_code == 401


def test_token_keyword_must_be_bearer(token):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')
    assert client.post('/api/patients', PATIENT, format='json').status_code == 401


def test_expired_token_blocks_writes_but_not_reads(settings, client, token):
    settings.AUTH_TOKEN_TTL_HOURS = 1
    Token.objects.filter(key=token.key).update(created=timezone.now() - timedelta(hours=2))
    r = client.post('/api/patients', PATIENT, format='json')
    assert r.status_code == 401
    assert r.data == {'error': 'Authentication required', 'code': 'AUTHENTICATION_REQUIRED'}
    assert Patient.objects.count() == 0
    assert client.get('/api/patients').status_code == 200


def test_expired_token_is_rotated_on_login(settings, user, token):
    settings.AUTH_TOKEN_TTL_HOURS = 1
    Token.objects.filter(key=token.key).update(created=timezone.now() - timedelta(hours=2))
    r = login(APIClient(), 'asha', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['token'] != token.key


def test_unknown_token_reads_as_anonymous(db):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-real-token')
    assert client.get('/api/patients').status_code == 200
    assert client.delete('/api/patients?id=1').status_code == 401
