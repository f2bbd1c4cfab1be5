"""Shared fixtures: users, identity-header clients and JSON helpers."""

import json

import pytest
from django.contrib.auth.models import User
from django.test import Client

CRON_SECRET = 'test-cron-secret'


@pytest.fixture(autouse=True)
def test_settings(settings):
    """Deterministic integrations for every test."""
    settings.CRON_SECRET = CRON_SECRET
    settings.CALENDAR_PROVIDER = 'mock'
    settings.COACH_TIMEZONE = 'Europe/Prague'
    settings.ENCRYPTION_MASTER_KEY = ''
    settings.CLICKUP_API_TOKEN = ''
    settings.CLICKUP_LIST_ID = ''
    settings.ADMIN_EMAIL = 'admin@example.com'
    settings.APP_URL = 'https://pokrok.test'
    return settings


class ApiClient:
    """Django test client that speaks JSON and carries the identity header."""

    def __init__(self, username=None):
        headers = {'HTTP_X_IDENTITY_USER': username} if username else {}
        self.client = Client(**headers)

    def _send(self, method, path, data=None, **extra):
        body = json.dumps(data) if data is not None else ''
        return getattr(self.client, method)(path, data=body, content_type='application/json', **extra)

    def get(self, path, params=None, **extra):
        return self.client.get(path, data=params or {}, **extra)

    def post(self, path, data=None, **extra):
        return self._send('post', path, data, **extra)

    def put(self, path, data=None, **extra):
        return self._send('put', path, data, **extra)

    def delete(self, path, data=None, **extra):
        return self._send('delete', path, data, **extra)


@pytest.fixture
def alice(db):
    return User.objects.create_user(username='alice', email='alice@example.com')


@pytest.fixture
def bob(db):
    return User.objects.create_user(username='bob', email='bob@example.com')


@pytest.fixture
def staff(db):
    return User.objects.create_user(username='editor', email='editor@example.com', is_staff=True)


@pytest.fixture
def api(alice):
    return ApiClient('alice')


@pytest.fixture
def bob_api(bob):
    return ApiClient('bob')


@pytest.fixture
def staff_api(staff):
    return ApiClient('editor')


@pytest.fixture
def anon_api(db):
    return ApiClient()


@pytest.fixture
def cron_headers():
    return {'HTTP_AUTHORIZATION': f'Bearer {CRON_SECRET}'}


@pytest.fixture
def make_api(db):
    """Client for an arbitrary identity."""
    return ApiClient
