# apps/goals/views.py
from django.db import transaction
from django.http import JsonResponse

from apps.core.api import (
    apply_filter, bind_form, coerce_id, get_record_id, json_endpoint, model_to_json,
    parse_json, verify_ownership,
)
from apps.core.exceptions import ValidationFailed
from .adapters.orm_repositories import DjangoGoalRepository
from .domain.entities import FocusStatus
from .domain.services import FocusService
from .filters import GoalFilter
from .forms import GoalForm
from .models import Goal


def goal_to_json(goal):
    return model_to_json(goal, encrypted=GoalForm.encrypted_fields)


def focus_service():
    return FocusService(DjangoGoalRepository())


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def goals_view(request):
    user = request.user

    if request.method == 'GET':
        goals = apply_filter(GoalFilter, request, Goal.objects.filter(user=user))
        return JsonResponse({'goals': [goal_to_json(g) for g in goals]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('title'):
            raise ValidationFailed('title is required')
        goal = bind_form(GoalForm, payload, user).save()
        return JsonResponse(goal_to_json(goal), status=201)

    goal = verify_ownership(Goal, get_record_id(request, payload), user)

    if request.method == 'PUT':
        goal = bind_form(GoalForm, payload, user, instance=goal).save()
        return JsonResponse(goal_to_json(goal))

    with transaction.atomic():
        if goal.focus_status == FocusStatus.ACTIVE_FOCUS.value:
            # Close the gap in the ranking before the row disappears
            focus_service().demote(user.id, goal.id, None)
        goal.delete()
    return JsonResponse({'success': True})


def _focus_list(user, status):
    goals = Goal.objects.filter(user=user, focus_status=status).order_by('focus_order', 'id')
    return [goal_to_json(g) for g in goals]


@json_endpoint('GET', 'POST', 'PUT')
def focus_view(request):
    user = request.user

    if request.method == 'GET':
        status = request.GET.get('focusStatus') or FocusStatus.ACTIVE_FOCUS.value
        if status not in [s.value for s in FocusStatus]:
            raise ValidationFailed(f'Invalid focusStatus: {status}')
        return JsonResponse({'goals': _focus_list(user, status)})

    payload = parse_json(request)
    service = focus_service()

    if request.method == 'POST':
        if 'focusStatus' not in payload:
            raise ValidationFailed('focusStatus is required')
        goal_id = coerce_id(payload.get('goalId'), 'goalId')
        service.set_focus(user.id, goal_id, payload['focusStatus'], payload.get('focusOrder'))
    else:
        goal_ids = payload.get('goalIds')
        if not isinstance(goal_ids, list):
            raise ValidationFailed('goalIds must be a list')
        service.reorder(user.id, goal_ids)

    return JsonResponse({'success': True, 'goals': _focus_list(user, FocusStatus.ACTIVE_FOCUS.value)})
