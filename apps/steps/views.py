# apps/steps/views.py
import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone

from apps.core.api import apply_filter, bind_form, get_record_id, json_endpoint, model_to_json, parse_json, verify_ownership
from apps.core.cron import cron_secret_required
from apps.core.exceptions import ValidationFailed
from .adapters.orm_repositories import DjangoStepRepository
from .domain.services import RecurrenceService
from .filters import StepFilter
from .forms import DailyStepForm
from .models import DailyStep

logger = logging.getLogger(__name__)


def step_to_json(step):
    return model_to_json(step, encrypted=DailyStepForm.encrypted_fields)


def recurrence_service():
    return RecurrenceService(DjangoStepRepository(), lookahead_days=settings.RECURRENCE_LOOKAHEAD_DAYS)


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def daily_steps_view(request):
    user = request.user

    if request.method == 'GET':
        steps = apply_filter(StepFilter, request, DailyStep.objects.filter(user=user))
        return JsonResponse({'steps': [step_to_json(s) for s in steps]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('title'):
            raise ValidationFailed('title is required')
        step = bind_form(DailyStepForm, payload, user).save()
        return JsonResponse(step_to_json(step), status=201)

    key = 'stepId' if ('stepId' in payload or 'stepId' in request.GET) else 'id'
    step = verify_ownership(DailyStep, get_record_id(request, payload, key=key), user)

    if request.method == 'PUT':
        # {id, completed} alone just toggles; anything else is a partial update
        step = bind_form(DailyStepForm, payload, user, instance=step).save()
        return JsonResponse(step_to_json(step))

    step.delete()
    return JsonResponse({'success': True})


@json_endpoint('GET', 'POST', public=True)
@cron_secret_required
def cron_generate_recurring_instances(request):
    result = recurrence_service().generate_instances(today=timezone.localdate())

    return JsonResponse({
        'success': True,
        'message': f'Created {result.created_count} recurring step instances',
        'createdCount': result.created_count,
        'errorCount': len(result.errors),
        'timestamp': timezone.now().isoformat(),
    })
