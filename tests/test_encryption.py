"""Per-user field encryption."""

import pytest
from django.core.exceptions import ImproperlyConfigured

from apps.areas.models import Area, Milestone
from apps.core import encryption
from apps.goals.models import Goal

MASTER_KEY = 'k' * 32


@pytest.fixture
def encrypted(settings):
    settings.ENCRYPTION_MASTER_KEY = MASTER_KEY
    return settings


class TestEncryptionPrimitives:
    """encrypt / decrypt"""

    def test_roundtrip(self, encrypted):
        stored = encryption.encrypt('tajný plán', 7)

        assert stored != 'tajný plán'
        assert len(stored.split(':')) == 3
        assert encryption.decrypt(stored, 7) == 'tajný plán'

    def test_same_text_encrypts_differently(self, encrypted):
        assert encryption.encrypt('abc', 1) != encryption.encrypt('abc', 1)

    def test_other_user_gets_the_stored_value(self, encrypted):
        stored = encryption.encrypt('abc', 1)
        assert encryption.decrypt(stored, 2) == stored

    def test_plain_legacy_value_passes_through(self, encrypted):
        assert encryption.decrypt('just text', 1) == 'just text'
        assert encryption.decrypt('a:b:c', 1) == 'a:b:c'

    def test_empty_values_pass_through(self, encrypted):
        assert encryption.encrypt('', 1) == ''
        assert encryption.encrypt(None, 1) is None

    def test_disabled_without_master_key(self, settings):
        settings.ENCRYPTION_MASTER_KEY = ''
        assert encryption.is_enabled() is False
        assert encryption.encrypt('abc', 1) == 'abc'

    def test_short_master_key_is_rejected(self, settings):
        settings.ENCRYPTION_MASTER_KEY = 'short'
        with pytest.raises(ImproperlyConfigured):
            encryption.encrypt('abc', 1)


@pytest.mark.django_db
class TestEncryptedFields:
    """Sensitive fields are stored encrypted and served decrypted."""

    def test_goal_description(self, api, alice, encrypted):
        response = api.post('/api/goals', {'title': 'Cíl', 'description': 'soukromá poznámka'})

        assert response.json()['description'] == 'soukromá poznámka'
        stored = Goal.objects.get(pk=response.json()['id']).description
        assert stored != 'soukromá poznámka'
        assert encryption.decrypt(stored, alice.id) == 'soukromá poznámka'

    def test_partial_update_keeps_encrypted_description_readable(self, api, alice, encrypted):
        goal_id = api.post('/api/goals', {'title': 'Cíl', 'description': 'tajné'}).json()['id']

        response = api.put('/api/goals', {'id': goal_id, 'title': 'Jiný název'})

        assert response.json()['description'] == 'tajné'
        assert encryption.decrypt(Goal.objects.get(pk=goal_id).description, alice.id) == 'tajné'

    def test_milestone_title_and_description(self, api, alice, encrypted):
        area = Area.objects.create(user=alice, name='Zdraví')

        response = api.post('/api/milestones', {'area_id': area.id, 'title': 'Půlmaraton', 'description': 'pod 2 h'})

        assert response.status_code == 201
        assert response.json()['title'] == 'Půlmaraton'
        milestone = Milestone.objects.get(pk=response.json()['id'])
        assert milestone.title != 'Půlmaraton'
        assert milestone.description != 'pod 2 h'
