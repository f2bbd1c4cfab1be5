"""Ranked focus goals: promote, demote and reorder keep ranks dense."""

import pytest

from apps.core.exceptions import Forbidden, NotFound, ValidationFailed
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.domain.entities import FocusStatus
from apps.goals.domain.services import FocusService
from apps.goals.models import Goal

FOCUS_URL = '/api/goals/focus'
ACTIVE = FocusStatus.ACTIVE_FOCUS.value


def service():
    return FocusService(DjangoGoalRepository())


def ranks(user):
    """{title: rank} of the user's focused goals."""
    return dict(
        Goal.objects.filter(user=user, focus_status=ACTIVE).values_list('title', 'focus_order')
    )


def assert_dense(user):
    orders = sorted(Goal.objects.filter(user=user, focus_status=ACTIVE).values_list('focus_order', flat=True))
    assert orders == list(range(1, len(orders) + 1))
    assert not Goal.objects.filter(user=user, focus_order__isnull=False).exclude(focus_status=ACTIVE).exists()


@pytest.fixture
def goals(alice):
    g1 = Goal.objects.create(user=alice, title='g1')
    g2 = Goal.objects.create(user=alice, title='g2', focus_status=ACTIVE, focus_order=1)
    g3 = Goal.objects.create(user=alice, title='g3', focus_status=ACTIVE, focus_order=2)
    return g1, g2, g3


@pytest.mark.django_db
class TestFocusService:
    """Rank maintenance."""

    def test_promote_to_first_shifts_the_others(self, alice, goals):
        g1, _, _ = goals

        service().promote(alice.id, g1.id, 1)

        assert ranks(alice) == {'g1': 1, 'g2': 2, 'g3': 3}

    def test_promote_without_rank_appends(self, alice, goals):
        g1, _, _ = goals

        service().promote(alice.id, g1.id)

        assert ranks(alice) == {'g2': 1, 'g3': 2, 'g1': 3}

    def test_out_of_range_rank_is_clamped(self, alice, goals):
        g1, _, _ = goals

        service().promote(alice.id, g1.id, 99)

        assert ranks(alice)['g1'] == 3

    def test_promoting_a_ranked_goal_moves_it(self, alice, goals):
        _, _, g3 = goals

        service().promote(alice.id, g3.id, 1)

        assert ranks(alice) == {'g3': 1, 'g2': 2}

    def test_demote_closes_the_gap(self, alice, goals):
        _, g2, _ = goals

        service().demote(alice.id, g2.id, FocusStatus.DEFERRED)

        assert ranks(alice) == {'g3': 1}
        g2.refresh_from_db()
        assert g2.focus_status == FocusStatus.DEFERRED.value
        assert g2.focus_order is None

    def test_demote_to_active_focus_is_invalid(self, alice, goals):
        with pytest.raises(ValidationFailed):
            service().demote(alice.id, goals[1].id, FocusStatus.ACTIVE_FOCUS)

    def test_reorder_ranks_in_list_order(self, alice, goals):
        g1, g2, g3 = goals

        service().reorder(alice.id, [g3.id, g1.id, g2.id])

        assert ranks(alice) == {'g3': 1, 'g1': 2, 'g2': 3}

    def test_reorder_keeps_unlisted_focus_goals_behind(self, alice, goals):
        g1, _, g3 = goals

        service().reorder(alice.id, [g1.id])

        assert ranks(alice) == {'g1': 1, 'g2': 2, 'g3': 3}

    def test_reorder_with_foreign_goal_is_forbidden(self, alice, bob, goals):
        foreign = Goal.objects.create(user=bob, title='cizí')

        with pytest.raises(Forbidden):
            service().reorder(alice.id, [goals[0].id, foreign.id])

        assert ranks(alice) == {'g2': 1, 'g3': 2}

    @pytest.mark.parametrize('ids', [[], [1, 1], ['x']])
    def test_reorder_rejects_malformed_lists(self, alice, ids):
        with pytest.raises(ValidationFailed):
            service().reorder(alice.id, ids)

    def test_promote_foreign_goal_is_not_found(self, alice, bob):
        foreign = Goal.objects.create(user=bob, title='cizí')

        with pytest.raises(NotFound):
            service().promote(alice.id, foreign.id)

    def test_ranks_stay_dense_over_a_sequence(self, alice, goals):
        g1, g2, g3 = goals
        g4 = Goal.objects.create(user=alice, title='g4')
        s = service()

        s.promote(alice.id, g4.id, 2)
        assert_dense(alice)
        s.demote(alice.id, g2.id)
        assert_dense(alice)
        s.promote(alice.id, g1.id, 1)
        assert_dense(alice)
        s.reorder(alice.id, [g3.id, g4.id])
        assert_dense(alice)
        s.set_focus(alice.id, g4.id, None)
        assert_dense(alice)

        assert ranks(alice) == {'g3': 1, 'g1': 2}

    def test_other_owners_are_untouched(self, alice, bob, goals):
        theirs = Goal.objects.create(user=bob, title='b1', focus_status=ACTIVE, focus_order=1)

        service().promote(alice.id, goals[0].id, 1)

        theirs.refresh_from_db()
        assert theirs.focus_order == 1


@pytest.mark.django_db
class TestFocusApi:
    """/api/goals/focus"""

    def test_promote_via_post(self, api, alice, goals):
        g1, _, _ = goals

        response = api.post(FOCUS_URL, {'goalId': g1.id, 'focusStatus': ACTIVE, 'focusOrder': 1})

        assert response.status_code == 200
        assert [g['title'] for g in response.json()['goals']] == ['g1', 'g2', 'g3']

    def test_null_status_demotes(self, api, alice, goals):
        _, g2, _ = goals

        api.post(FOCUS_URL, {'goalId': g2.id, 'focusStatus': None})

        assert ranks(alice) == {'g3': 1}

    def test_invalid_status_is_rejected(self, api, goals):
        response = api.post(FOCUS_URL, {'goalId': goals[0].id, 'focusStatus': 'someday'})
        assert response.status_code == 400

    def test_reorder_via_put(self, api, alice, goals):
        g1, g2, g3 = goals

        response = api.put(FOCUS_URL, {'goalIds': [g3.id, g2.id]})

        assert response.status_code == 200
        assert ranks(alice) == {'g3': 1, 'g2': 2}

    def test_reorder_foreign_goal_is_forbidden(self, bob_api, goals):
        assert bob_api.put(FOCUS_URL, {'goalIds': [goals[0].id]}).status_code == 403

    def test_list_defaults_to_active_focus(self, api, goals):
        body = api.get(FOCUS_URL).json()
        assert [g['title'] for g in body['goals']] == ['g2', 'g3']

    def test_deleting_a_ranked_goal_closes_the_gap(self, api, alice, goals):
        _, g2, _ = goals

        assert api.delete('/api/goals', {'id': g2.id}).status_code == 200

        assert ranks(alice) == {'g3': 1}


@pytest.mark.django_db
class TestGoalsApi:
    """/api/goals"""

    def test_create_ignores_focus_fields(self, api):
        response = api.post('/api/goals', {'title': 'Cíl', 'focus_status': ACTIVE, 'focus_order': 1})

        assert response.status_code == 201
        assert response.json()['focus_status'] is None

    def test_progress_over_100_is_rejected(self, api):
        assert api.post('/api/goals', {'title': 'Cíl', 'progress_percentage': 150}).status_code == 400

    def test_invalid_status_choice_is_rejected(self, api):
        assert api.post('/api/goals', {'title': 'Cíl', 'status': 'someday'}).status_code == 400

    def test_filter_by_status(self, api, alice):
        Goal.objects.create(user=alice, title='A', status='active')
        Goal.objects.create(user=alice, title='B', status='paused')

        body = api.get('/api/goals', {'status': 'paused'}).json()

        assert [g['title'] for g in body['goals']] == ['B']

    def test_foreign_goal_update_is_forbidden(self, bob_api, alice):
        goal = Goal.objects.create(user=alice, title='Soukromý')
        assert bob_api.put('/api/goals', {'id': goal.id, 'title': 'x'}).status_code == 403
