"""Habits and streaks."""

from datetime import date, timedelta

import pytest
from django.utils import timezone

from apps.habits.models import Habit, HabitCompletion
from apps.habits.services import HabitService


@pytest.fixture
def habit(alice):
    return Habit.objects.create(user=alice, name='Meditace')


@pytest.mark.django_db
class TestHabitService:
    """Streak bookkeeping."""

    def test_consecutive_days_extend_the_streak(self, habit):
        service = HabitService()
        service.complete_habit(habit, date(2024, 3, 1))
        service.complete_habit(habit, date(2024, 3, 2))

        assert habit.current_streak == 2
        assert habit.longest_streak == 2

    def test_gap_restarts_the_streak(self, habit):
        service = HabitService()
        service.complete_habit(habit, date(2024, 3, 1))
        service.complete_habit(habit, date(2024, 3, 2))
        service.complete_habit(habit, date(2024, 3, 5))

        assert habit.current_streak == 1
        assert habit.longest_streak == 2

    def test_same_day_twice_is_a_noop(self, habit):
        service = HabitService()
        assert service.complete_habit(habit, date(2024, 3, 1)) is True
        assert service.complete_habit(habit, date(2024, 3, 1)) is False

        assert habit.current_streak == 1
        assert HabitCompletion.objects.filter(habit=habit).count() == 1

    def test_uncomplete_rebuilds_from_log(self, habit):
        service = HabitService()
        for day in (1, 2, 3):
            service.complete_habit(habit, date(2024, 3, day))

        service.uncomplete_habit(habit, date(2024, 3, 3))

        assert habit.current_streak == 2
        assert habit.longest_streak == 2
        assert habit.last_completed_date == date(2024, 3, 2)

    def test_backfilled_day_joins_the_streak(self, habit):
        service = HabitService()
        service.complete_habit(habit, date(2024, 3, 1))
        service.complete_habit(habit, date(2024, 3, 3))
        service.complete_habit(habit, date(2024, 3, 2))

        assert habit.current_streak == 3
        assert habit.longest_streak == 3


@pytest.mark.django_db
class TestHabitsApi:
    """/api/habits"""

    def test_create_defaults_description_to_name(self, api):
        response = api.post('/api/habits', {'name': 'Čtení'})

        assert response.status_code == 201
        body = response.json()
        assert body['description'] == 'Čtení'
        assert body['category'] == 'osobní'
        assert body['completed_today'] is False

    def test_invalid_weekday_is_rejected(self, api):
        response = api.post('/api/habits', {'name': 'Běh', 'frequency': 'custom', 'selected_days': ['pátek']})
        assert response.status_code == 400

    def test_complete_today_and_list(self, api, habit):
        response = api.post('/api/habits/complete', {'habitId': habit.id})

        assert response.status_code == 200
        assert response.json()['habit']['current_streak'] == 1

        listed = api.get('/api/habits').json()['habits']
        assert listed[0]['completed_today'] is True

    def test_uncomplete(self, api, habit):
        today = timezone.localdate()
        api.post('/api/habits/complete', {'habitId': habit.id})

        response = api.post('/api/habits/complete', {'habitId': habit.id, 'completed': False})

        assert response.json()['changed'] is True
        assert not HabitCompletion.objects.filter(habit=habit, date=today).exists()

    def test_complete_specific_date(self, api, habit):
        yesterday = timezone.localdate() - timedelta(days=1)

        api.post('/api/habits/complete', {'habitId': habit.id, 'date': yesterday.isoformat()})

        assert HabitCompletion.objects.filter(habit=habit, date=yesterday).exists()

    def test_bad_date(self, api, habit):
        assert api.post('/api/habits/complete', {'habitId': habit.id, 'date': '1.3.2024'}).status_code == 400

    def test_foreign_habit(self, bob_api, habit):
        assert bob_api.post('/api/habits/complete', {'habitId': habit.id}).status_code == 403

    def test_active_filter(self, api, alice):
        Habit.objects.create(user=alice, name='Aktivní')
        Habit.objects.create(user=alice, name='Pauza', is_active=False)

        names = [h['name'] for h in api.get('/api/habits', {'active': 'true'}).json()['habits']]

        assert names == ['Aktivní']
