# apps/newsletter/views.py
from django.http import JsonResponse
from django.utils import timezone

from apps.core.api import (
    bind_form, get_record_id, json_endpoint, model_to_json, parse_json, require_staff,
)
from apps.core.cron import cron_secret_required
from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from . import services
from .forms import CampaignForm
from .models import Campaign


def public_campaign(campaign):
    return {
        'id': campaign.pk,
        'subject': campaign.subject,
        'sender': campaign.sender,
        'description': campaign.description,
        'sections': campaign.sections,
        'sent_at': campaign.sent_at,
    }


@json_endpoint('POST', public=True)
def subscribe_view(request):
    payload = parse_json(request)
    subscriber = services.subscribe(payload.get('email'), payload.get('source', ''))
    return JsonResponse({'success': True, 'status': subscriber.status}, status=201)


@json_endpoint('GET', public=True)
def confirm_view(request):
    subscriber = services.confirm(request.GET.get('token'))
    return JsonResponse({'success': True, 'email': subscriber.email})


@json_endpoint('POST', public=True)
def unsubscribe_view(request):
    payload = parse_json(request)
    services.unsubscribe(payload.get('token') or request.GET.get('token'))
    return JsonResponse({'success': True})


@json_endpoint('GET', public=True)
def public_campaigns_view(request):
    campaigns = Campaign.objects.filter(
        status=Campaign.StatusChoices.SENT,
        show_on_blog=True,
    ).order_by('-sent_at')
    if request.GET.get('id'):
        campaign = campaigns.filter(pk=get_record_id(request)).first()
        if campaign is None:
            raise NotFound('Campaign not found')
        return JsonResponse({'campaign': public_campaign(campaign)})
    return JsonResponse({'campaigns': [public_campaign(c) for c in campaigns]})


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def admin_campaigns_view(request):
    require_staff(request.user)

    if request.method == 'GET':
        campaigns = Campaign.objects.all()
        if request.GET.get('status'):
            campaigns = campaigns.filter(status=request.GET['status'])
        return JsonResponse({'campaigns': [model_to_json(c) for c in campaigns]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('subject'):
            raise ValidationFailed('subject is required')
        campaign = bind_form(CampaignForm, payload, request.user).save()
        return JsonResponse(model_to_json(campaign), status=201)

    campaign = Campaign.objects.filter(pk=get_record_id(request, payload)).first()
    if campaign is None:
        raise NotFound('Campaign not found')

    if request.method == 'PUT':
        if campaign.status == Campaign.StatusChoices.SENT:
            raise Conflict('A sent campaign cannot be changed')
        campaign = bind_form(CampaignForm, payload, request.user, instance=campaign).save()
        return JsonResponse(model_to_json(campaign))

    campaign.delete()
    return JsonResponse({'success': True})


@json_endpoint('POST')
def admin_send_campaign_view(request):
    """Sends a campaign right away."""
    require_staff(request.user)
    payload = parse_json(request)
    campaign = Campaign.objects.filter(pk=get_record_id(request, payload)).first()
    if campaign is None:
        raise NotFound('Campaign not found')
    if campaign.status == Campaign.StatusChoices.SENT:
        raise Conflict('Campaign was already sent')
    recipients = services.send_campaign(campaign)
    if recipients is None:
        raise Conflict('Campaign was already sent')
    return JsonResponse({'success': True, 'recipients': recipients})


@json_endpoint('GET', 'POST', public=True)
@cron_secret_required
def cron_send_newsletters(request):
    result = services.send_due_campaigns()
    return JsonResponse({'success': True, **result, 'timestamp': timezone.now().isoformat()})
