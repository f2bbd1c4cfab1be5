from datetime import date

from django.http import JsonResponse
from django.utils import timezone

from apps.core.api import bind_form, coerce_id, get_record_id, json_endpoint, model_to_json, parse_json, verify_ownership
from apps.core.exceptions import ValidationFailed
from .forms import HabitForm
from .models import Habit
from .services import HabitService


def habit_to_json(habit, completed_ids=()):
    data = model_to_json(habit)
    data['completed_today'] = habit.id in completed_ids
    return data


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def habits_view(request):
    user = request.user

    if request.method == 'GET':
        habits = Habit.objects.filter(user=user)
        if request.GET.get('active') == 'true':
            habits = habits.filter(is_active=True)
        # Mark the ones done today
        done = HabitService().completed_ids(habits, timezone.localdate())
        return JsonResponse({'habits': [habit_to_json(h, done) for h in habits]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('name'):
            raise ValidationFailed('name is required')
        habit = bind_form(HabitForm, payload, user).save()
        return JsonResponse(habit_to_json(habit), status=201)

    habit = verify_ownership(Habit, get_record_id(request, payload), user)

    if request.method == 'PUT':
        habit = bind_form(HabitForm, payload, user, instance=habit).save()
        return JsonResponse(habit_to_json(habit))

    habit.delete()
    return JsonResponse({'success': True})


@json_endpoint('POST')
def habit_complete_view(request):
    payload = parse_json(request)
    habit = verify_ownership(Habit, coerce_id(payload.get('habitId'), 'habitId'), request.user)

    day = timezone.localdate()
    if payload.get('date'):
        try:
            day = date.fromisoformat(str(payload['date']))
        except ValueError:
            raise ValidationFailed('date must be YYYY-MM-DD')

    service = HabitService()
    if payload.get('completed', True):
        changed = service.complete_habit(habit, day)
    else:
        changed = service.uncomplete_habit(habit, day)

    habit.refresh_from_db()
    done = service.completed_ids([habit], timezone.localdate())
    return JsonResponse({'success': True, 'changed': changed, 'habit': habit_to_json(habit, done)})
