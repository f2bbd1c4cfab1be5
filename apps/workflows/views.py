from django.http import JsonResponse

from apps.core.api import bind_form, get_record_id, json_endpoint, model_to_json, parse_json, verify_ownership
from apps.core.exceptions import ValidationFailed
from .forms import AutomationForm, WorkflowForm
from .models import Automation, Workflow


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def workflows_view(request):
    user = request.user

    if request.method == 'GET':
        workflows = Workflow.objects.filter(user=user)
        return JsonResponse({'workflows': [model_to_json(w) for w in workflows]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('type') or not payload.get('name'):
            raise ValidationFailed('type and name are required')
        workflow = bind_form(WorkflowForm, payload, user).save()
        return JsonResponse(model_to_json(workflow), status=201)

    workflow = verify_ownership(Workflow, get_record_id(request, payload), user)

    if request.method == 'PUT':
        workflow = bind_form(WorkflowForm, payload, user, instance=workflow).save()
        return JsonResponse(model_to_json(workflow))

    workflow.delete()
    return JsonResponse({'success': True})


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def automations_view(request):
    user = request.user

    if request.method == 'GET':
        automations = Automation.objects.filter(user=user)
        if request.GET.get('type'):
            automations = automations.filter(type=request.GET['type'])
        return JsonResponse({'automations': [model_to_json(a) for a in automations]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('name'):
            raise ValidationFailed('name is required')
        if not payload.get('type') or payload.get('target_id') in (None, ''):
            raise ValidationFailed('type and target_id are required')
        automation = bind_form(AutomationForm, payload, user).save()
        return JsonResponse(model_to_json(automation), status=201)

    automation = verify_ownership(Automation, get_record_id(request, payload), user)

    if request.method == 'PUT':
        automation = bind_form(AutomationForm, payload, user, instance=automation).save()
        return JsonResponse(model_to_json(automation))

    automation.delete()
    return JsonResponse({'success': True})
