# backend/django_app/tests/conftest.py

import pytest

from tmbackend.api import tokens
from tmbackend.api.models import User


@pytest.fixture(autouse=True)
def fast_hasher(settings):
    """Salted MD5 keeps hashing cheap; production uses Django's PBKDF2 default."""
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture()
def make_user(db):
    def _make_user(name='Alice', email='alice@example.com', password='secret123'):
        return User.objects.create_user(name, email, password)
    return _make_user


@pytest.fixture()
def alice(make_user):
    return make_user()


@pytest.fixture()
def bob(make_user):
    return make_user(name='Bob', email='bob@example.com', password='hunter22')


@pytest.fixture()
def bearer():
    """Build request kwargs carrying a valid token for a user."""
    def _bearer(user):
        return {"HTTP_AUTHORIZATION": f"Bearer {tokens.issue(user.claims())}"}
    return _bearer


@pytest.fixture()
def post_json(client):
    def _post(url, body, **extra):
        return client.post(url, body, content_type='application/json', **extra)
    return _post


@pytest.fixture()
def put_json(client):
    def _put(url, body, **extra):
        return client.put(url, body, content_type='application/json', **extra)
    return _put
