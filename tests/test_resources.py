"""Areas, milestones, workflows, automations and the player."""

import pytest

from apps.areas.models import Area, Milestone
from apps.players.models import Player
from apps.workflows.models import Automation, Workflow


@pytest.mark.django_db
class TestAreas:
    """/api/areas and /api/milestones"""

    def test_create_area(self, api):
        response = api.post('/api/areas', {'name': 'Zdraví', 'color': '#22aa44'})

        assert response.status_code == 201
        assert response.json()['color'] == '#22aa44'

    def test_bad_color(self, api):
        assert api.post('/api/areas', {'name': 'Zdraví', 'color': 'green'}).status_code == 400

    def test_milestone_requires_area_and_title(self, api):
        assert api.post('/api/milestones', {'title': 'Bez oblasti'}).status_code == 400

    def test_milestone_in_foreign_area_is_not_found(self, api, bob):
        area = Area.objects.create(user=bob, name='Bobova')
        assert api.post('/api/milestones', {'area_id': area.id, 'title': 'x'}).status_code == 404

    def test_milestones_filtered_by_area(self, api, alice):
        work = Area.objects.create(user=alice, name='Práce')
        home = Area.objects.create(user=alice, name='Domov')
        Milestone.objects.create(user=alice, area=work, title='Povýšení')
        Milestone.objects.create(user=alice, area=home, title='Rekonstrukce')

        body = api.get('/api/milestones', {'area_id': work.id}).json()

        assert [m['title'] for m in body['milestones']] == ['Povýšení']

    def test_milestone_progress_limit(self, api, alice):
        area = Area.objects.create(user=alice, name='Práce')
        response = api.post('/api/milestones', {'area_id': area.id, 'title': 'x', 'progress': 120})
        assert response.status_code == 400

    def test_deleting_area_removes_milestones(self, api, alice):
        area = Area.objects.create(user=alice, name='Práce')
        Milestone.objects.create(user=alice, area=area, title='x')

        api.delete('/api/areas', {'id': area.id})

        assert not Milestone.objects.exists()


@pytest.mark.django_db
class TestWorkflows:
    """/api/workflows and /api/automations"""

    def test_create_workflow_with_default_trigger(self, api):
        response = api.post('/api/workflows', {'type': 'daily_review', 'name': 'Večerní revize'})

        assert response.status_code == 201
        assert response.json()['trigger_time'] == '18:00:00'

    def test_workflow_requires_type_and_name(self, api):
        assert api.post('/api/workflows', {'name': 'Bez typu'}).status_code == 400

    def test_automation_requires_target(self, api):
        assert api.post('/api/automations', {'name': 'Auto', 'type': 'goal'}).status_code == 400

    def test_one_time_automation_needs_a_date(self, api):
        response = api.post('/api/automations', {
            'name': 'Jednou', 'type': 'metric', 'target_id': 5, 'frequency_type': 'one-time',
        })
        assert response.status_code == 400
        assert 'scheduled_date' in response.json()['details']

    def test_automation_defaults(self, api):
        body = api.post('/api/automations', {'name': 'Týdně', 'type': 'goal', 'target_id': 5}).json()

        assert body['frequency_type'] == 'recurring'
        assert body['is_active'] is True

    def test_foreign_automation_is_forbidden(self, bob_api, alice):
        automation = Automation.objects.create(user=alice, name='A', type='goal', target_id=1)

        assert bob_api.put('/api/automations', {'id': automation.id, 'name': 'x'}).status_code == 403
        assert bob_api.delete('/api/automations', {'id': automation.id}).status_code == 403
        assert Automation.objects.filter(pk=automation.id).exists()

    def test_partial_workflow_update(self, api, alice):
        workflow = Workflow.objects.create(user=alice, type='daily_review', name='Revize', description='popis')

        api.put('/api/workflows', {'id': workflow.id, 'enabled': False})

        workflow.refresh_from_db()
        assert workflow.enabled is False
        assert workflow.description == 'popis'


@pytest.mark.django_db
class TestPlayer:
    """/api/player"""

    url = '/api/player'

    def test_no_player_yet(self, api):
        assert api.get(self.url).json() == {'player': None}

    def test_create_then_conflict(self, api):
        created = api.post(self.url, {'name': 'Hrdina', 'appearance': {'hair': 'brown'}})

        assert created.status_code == 201
        assert created.json()['player']['level'] == 1
        assert api.post(self.url, {'name': 'Druhý'}).status_code == 409

    def test_appearance_must_be_an_object(self, api):
        assert api.post(self.url, {'name': 'Hrdina', 'appearance': ['x']}).status_code == 400

    def test_partial_update(self, api, alice):
        Player.objects.create(user=alice, name='Hrdina', energy=80)

        body = api.put(self.url, {'experience': 120}).json()['player']

        assert body['experience'] == 120
        assert body['energy'] == 80
        assert body['name'] == 'Hrdina'

    def test_delete(self, api, alice):
        Player.objects.create(user=alice, name='Hrdina')

        assert api.delete(self.url).status_code == 200
        assert api.delete(self.url).status_code == 404
