"""Identity header auth, profile, account and the error envelope."""

import pytest
from django.contrib.auth.models import User

from apps.areas.models import Area
from apps.core.models import UserProfile
from apps.crm.models import Lead
from apps.goals.models import Goal
from apps.players.models import Player
from apps.steps.models import DailyStep


@pytest.mark.django_db
class TestAuthentication:
    """Users come from the identity provider header."""

    def test_missing_header_is_unauthorized(self, anon_api):
        response = anon_api.get('/api/goals')

        assert response.status_code == 401
        assert 'error' in response.json()

    def test_unknown_user_is_provisioned(self, make_api):
        client = make_api('newcomer')

        response = client.get('/api/goals', HTTP_X_IDENTITY_EMAIL='NewComer@Example.com')

        assert response.status_code == 200
        user = User.objects.get(username='newcomer')
        assert user.email == 'newcomer@example.com'
        assert UserProfile.objects.filter(user=user).exists()

    def test_method_not_allowed(self, api):
        assert api.client.patch('/api/goals').status_code == 405

    def test_invalid_json_body(self, api):
        response = api.client.post('/api/goals', data='{not json', content_type='application/json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid JSON body'


@pytest.mark.django_db
class TestProfile:
    """/api/profile"""

    def test_get_creates_defaults(self, api):
        body = api.get('/api/profile').json()['profile']

        assert body['username'] == 'alice'
        assert body['timezone'] == 'Europe/Prague'
        assert body['language'] == 'cs'

    def test_partial_update(self, api):
        api.put('/api/profile', {'display_name': 'Alice'})
        body = api.put('/api/profile', {'language': 'en'}).json()['profile']

        assert body['display_name'] == 'Alice'
        assert body['language'] == 'en'


@pytest.mark.django_db
class TestAccount:
    """Account deletion and data reset."""

    def test_delete_account_cascades(self, api, alice):
        Goal.objects.create(user=alice, title='Cíl')
        Lead.objects.create(user=alice, email='x@example.com', name='X')

        response = api.delete('/api/account')

        assert response.status_code == 200
        assert not User.objects.filter(username='alice').exists()
        assert Goal.objects.count() == 0
        assert Lead.objects.count() == 0

    def test_reset_data_keeps_user_and_crm(self, api, alice):
        area = Area.objects.create(user=alice, name='Práce')
        Goal.objects.create(user=alice, title='Cíl', area=area)
        DailyStep.objects.create(user=alice, title='Krok')
        Player.objects.create(user=alice, name='Hrdina')
        Lead.objects.create(user=alice, email='x@example.com', name='X')

        response = api.post('/api/account/reset-data')

        assert response.status_code == 200
        assert response.json()['deleted']['goal'] == 1
        assert User.objects.filter(pk=alice.pk).exists()
        assert not Goal.objects.filter(user=alice).exists()
        assert not DailyStep.objects.filter(user=alice).exists()
        assert not Area.objects.filter(user=alice).exists()
        assert not Player.objects.filter(user=alice).exists()
        assert Lead.objects.filter(user=alice).exists()

    def test_reset_leaves_other_users_alone(self, api, bob):
        Goal.objects.create(user=bob, title='Bobův cíl')

        api.post('/api/account/reset-data')

        assert Goal.objects.filter(user=bob).count() == 1


@pytest.mark.django_db
class TestUnhandledErrors:
    """Unexpected exceptions become a 500 envelope."""

    def test_details_only_in_debug(self, api, settings, monkeypatch):
        from apps.goals import views

        def boom(*args, **kwargs):
            raise RuntimeError('database exploded')

        monkeypatch.setattr(views, 'apply_filter', boom)

        settings.DEBUG = False
        response = api.get('/api/goals')
        assert response.status_code == 500
        assert 'details' not in response.json()

        settings.DEBUG = True
        assert api.get('/api/goals').json()['details'] == 'database exploded'
