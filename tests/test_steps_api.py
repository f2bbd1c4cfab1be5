"""Daily steps over the JSON API."""

from datetime import date

import pytest

from apps.goals.models import Goal
from apps.steps.models import DailyStep

URL = '/api/daily-steps'


@pytest.mark.django_db
class TestDailyStepsCrud:
    """Create, list, update and delete."""

    def test_create_and_list(self, api):
        response = api.post(URL, {'title': 'Napsat report', 'date': '2024-03-05', 'is_important': True})

        assert response.status_code == 201
        created = response.json()
        assert created['title'] == 'Napsat report'
        assert created['date'] == '2024-03-05'
        assert created['completed'] is False

        listed = api.get(URL, {'date': '2024-03-05'}).json()['steps']
        assert [s['id'] for s in listed] == [created['id']]

    def test_title_is_required(self, api):
        assert api.post(URL, {'description': 'bez názvu'}).status_code == 400

    def test_unknown_fields_are_ignored(self, api):
        response = api.post(URL, {'title': 'Krok', 'nonsense': 1})
        assert response.status_code == 201
        assert 'nonsense' not in response.json()

    def test_invalid_recurrence_is_rejected(self, api):
        response = api.post(URL, {'title': 'Krok', 'frequency': 'weekly', 'selected_days': ['funday']})
        assert response.status_code == 400
        assert 'selected_days' in response.json()['details']

    def test_recurring_title_leaves_room_for_the_date(self, api):
        weekly = {'frequency': 'weekly', 'selected_days': ['monday']}

        too_long = api.post(URL, {'title': 'x' * 243, **weekly})
        fits = api.post(URL, {'title': 'x' * 242, **weekly})
        plain = api.post(URL, {'title': 'x' * 255})

        assert too_long.status_code == 400
        assert 'title' in too_long.json()['details']
        assert fits.status_code == 201
        assert plain.status_code == 201

    def test_instance_cannot_move_onto_a_taken_day(self, api, alice):
        template = DailyStep.objects.create(user=alice, title='Běh', frequency='daily')
        first = DailyStep.objects.create(user=alice, title='Běh - 6.3.2024', date=date(2024, 3, 6),
                                         source_template=template)
        DailyStep.objects.create(user=alice, title='Běh - 7.3.2024', date=date(2024, 3, 7),
                                 source_template=template)

        taken = api.put(URL, {'id': first.id, 'date': '2024-03-07'})
        free = api.put(URL, {'id': first.id, 'date': '2024-03-08'})

        assert taken.status_code == 400
        assert 'date' in taken.json()['details']
        assert free.status_code == 200
        first.refresh_from_db()
        assert first.date == date(2024, 3, 8)

    def test_toggle_completed_with_step_id(self, api, alice):
        step = DailyStep.objects.create(user=alice, title='Krok')

        response = api.put(URL, {'stepId': step.id, 'completed': True})

        assert response.status_code == 200
        step.refresh_from_db()
        assert step.completed is True
        assert step.completed_at is not None

    def test_open_checklist_blocks_completion(self, api, alice):
        step = DailyStep.objects.create(
            user=alice, title='Krok',
            checklist=[{'text': 'a', 'done': False}],
            require_checklist_complete=True,
        )

        response = api.put(URL, {'id': step.id, 'completed': True})

        assert response.status_code == 400
        assert 'completed' in response.json()['details']

    def test_partial_update_keeps_omitted_fields(self, api, alice):
        step = DailyStep.objects.create(user=alice, title='Krok', deadline=date(2024, 5, 1), estimated_time=60)

        api.put(URL, {'id': step.id, 'title': 'Nový název'})

        step.refresh_from_db()
        assert step.title == 'Nový název'
        assert step.deadline == date(2024, 5, 1)
        assert step.estimated_time == 60

    def test_explicit_null_clears_nullable_field(self, api, alice):
        step = DailyStep.objects.create(user=alice, title='Krok', deadline=date(2024, 5, 1))

        api.put(URL, {'id': step.id, 'deadline': None})

        step.refresh_from_db()
        assert step.deadline is None

    def test_delete_by_query_parameter(self, api, alice):
        step = DailyStep.objects.create(user=alice, title='Krok')

        response = api.delete(f'{URL}?id={step.id}')

        assert response.status_code == 200
        assert not DailyStep.objects.filter(pk=step.id).exists()

    def test_foreign_goal_cannot_be_linked(self, api, bob):
        goal = Goal.objects.create(user=bob, title='Cizí cíl')
        assert api.post(URL, {'title': 'Krok', 'goal_id': goal.id}).status_code == 400

    def test_bad_filter_value_is_rejected(self, api):
        assert api.get(URL, {'date': 'yesterday'}).status_code == 400


@pytest.mark.django_db
class TestStepGoalProgress:
    """Goals measured by steps follow their completed steps."""

    def test_progress_follows_completed_steps(self, alice):
        goal = Goal.objects.create(user=alice, title='Maraton', progress_type='steps')
        first = DailyStep.objects.create(user=alice, goal=goal, title='Běh 1')
        DailyStep.objects.create(user=alice, goal=goal, title='Běh 2')
        # Templates are not counted
        DailyStep.objects.create(user=alice, goal=goal, title='Šablona', frequency='daily')

        first.completed = True
        first.save()

        goal.refresh_from_db()
        assert goal.progress_percentage == 50


@pytest.mark.django_db
class TestOwnershipIsolation:
    """Another user's records are never readable or writable."""

    def test_foreign_step_is_forbidden(self, bob_api, alice):
        step = DailyStep.objects.create(user=alice, title='Soukromé')

        assert bob_api.put(URL, {'id': step.id, 'title': 'hacked'}).status_code == 403
        assert bob_api.delete(URL, {'id': step.id}).status_code == 403
        assert bob_api.get(URL).json()['steps'] == []

        step.refresh_from_db()
        assert step.title == 'Soukromé'

    def test_missing_step_is_not_found(self, api):
        assert api.put(URL, {'id': 999999, 'title': 'x'}).status_code == 404

    def test_missing_id_is_a_validation_error(self, api):
        assert api.put(URL, {'title': 'x'}).status_code == 400
