# apps/areas/views.py
from django.http import JsonResponse

from apps.core.api import bind_form, coerce_id, get_record_id, json_endpoint, model_to_json, parse_json, verify_ownership
from apps.core.exceptions import NotFound, ValidationFailed
from .forms import AreaForm, MilestoneForm
from .models import Area, Milestone


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def areas_view(request):
    user = request.user

    if request.method == 'GET':
        areas = Area.objects.filter(user=user)
        return JsonResponse({'areas': [model_to_json(a) for a in areas]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('name'):
            raise ValidationFailed('name is required')
        area = bind_form(AreaForm, payload, user).save()
        return JsonResponse(model_to_json(area), status=201)

    area = verify_ownership(Area, get_record_id(request, payload), user)

    if request.method == 'PUT':
        area = bind_form(AreaForm, payload, user, instance=area).save()
        return JsonResponse(model_to_json(area))

    area.delete()
    return JsonResponse({'success': True})


def milestone_to_json(milestone):
    return model_to_json(milestone, encrypted=MilestoneForm.encrypted_fields)


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def milestones_view(request):
    user = request.user

    if request.method == 'GET':
        milestones = Milestone.objects.filter(user=user)
        if request.GET.get('area_id'):
            milestones = milestones.filter(area_id=get_record_id(request, key='area_id'))
        return JsonResponse({'milestones': [milestone_to_json(m) for m in milestones]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not (payload.get('area_id') or payload.get('area')) or not payload.get('title'):
            raise ValidationFailed('area_id and title are required')
        area_id = coerce_id(payload.get('area_id') or payload.get('area'), 'area_id')
        if not Area.objects.filter(pk=area_id, user=user).exists():
            raise NotFound('Area not found')
        milestone = bind_form(MilestoneForm, payload, user).save()
        return JsonResponse(milestone_to_json(milestone), status=201)

    milestone = verify_ownership(Milestone, get_record_id(request, payload), user)

    if request.method == 'PUT':
        milestone = bind_form(MilestoneForm, payload, user, instance=milestone).save()
        return JsonResponse(milestone_to_json(milestone))

    milestone.delete()
    return JsonResponse({'success': True})
