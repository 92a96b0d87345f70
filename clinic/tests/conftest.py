import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from clinic.services.local_store import get_store


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters live in the locmem cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def local_store(settings, tmp_path):
    settings.LOCAL_STORE_DIR = tmp_path
    settings.LOCAL_STORE_BACKEND = 'auto'
    get_store.cache_clear()
    yield get_store()
    get_store.cache_clear()


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(
        username='asha', password='P@ssw0rd1', first_name='Asha', last_name='Worker'
    )


@pytest.fixture
def token(user):
    return Token.objects.create(user=user)


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def client(token):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f'Bearer {token.key}')
    return c
