# apps/core/views.py
import logging

from django.conf import settings
from django.db import transaction
from django.http import JsonResponse
from django.shortcuts import redirect
from django.utils import timezone
from google_auth_oauthlib.flow import Flow

from .api import bind_form, json_endpoint, model_to_json, parse_json
from .cron import cron_secret_required
from .exceptions import ValidationFailed
from .forms import UserProfileForm
from .models import GoogleCredentials, UserProfile
from .notifications import process_outbox

logger = logging.getLogger(__name__)

# Read-only access to the coach's calendar is enough for availability
SCOPES = ['https://www.googleapis.com/auth/calendar.readonly']


def _flow(state=None):
    return Flow.from_client_secrets_file(
        settings.GOOGLE_CLIENT_SECRETS_FILE,
        scopes=SCOPES,
        state=state,
        redirect_uri=settings.GOOGLE_REDIRECT_URI,
    )


@json_endpoint('GET')
def google_connect(request):
    flow = _flow()
    # offline + consent so Google returns a refresh token
    authorization_url, state = flow.authorization_url(
        access_type='offline',
        include_granted_scopes='true',
        prompt='consent',
    )
    request.session['google_auth_state'] = state
    return redirect(authorization_url)


@json_endpoint('GET')
def google_callback(request):
    state = request.session.get('google_auth_state')
    if not state:
        raise ValidationFailed('OAuth state missing, start the connection again')

    flow = _flow(state=state)
    flow.fetch_token(authorization_response=request.build_absolute_uri())
    creds = flow.credentials

    GoogleCredentials.objects.update_or_create(
        user=request.user,
        defaults={
            'token': creds.token,
            'refresh_token': creds.refresh_token,
            'token_uri': creds.token_uri,
            'client_id': creds.client_id,
            'client_secret': creds.client_secret,
            'scopes': ' '.join(creds.scopes or SCOPES),
        }
    )
    logger.info("Google calendar connected for user %s", request.user.pk)
    return JsonResponse({'success': True})


@json_endpoint('GET', 'PUT')
def profile_view(request):
    profile, _ = UserProfile.objects.get_or_create(user=request.user)

    if request.method == 'PUT':
        form = bind_form(UserProfileForm, parse_json(request), request.user, instance=profile)
        profile = form.save()

    data = model_to_json(profile)
    data['username'] = request.user.username
    data['email'] = request.user.email
    return JsonResponse({'profile': data})


@json_endpoint('DELETE')
def account_view(request):
    """Deletes the caller; every owned row goes with the user."""
    user_id = request.user.pk
    request.user.delete()
    logger.info("Account %s deleted", user_id)
    return JsonResponse({'success': True})


@json_endpoint('POST')
def reset_data_view(request):
    """Wipes the caller's game data but keeps the account."""
    from apps.areas.models import Area, Milestone
    from apps.goals.models import Goal
    from apps.habits.models import Habit
    from apps.players.models import Player
    from apps.steps.models import DailyStep
    from apps.workflows.models import Automation, Workflow

    deleted = {}
    with transaction.atomic():
        for model in (DailyStep, Habit, Milestone, Goal, Area, Workflow, Automation, Player):
            count, _ = model.objects.filter(user=request.user).delete()
            deleted[model._meta.model_name] = count

    return JsonResponse({'success': True, 'deleted': deleted})


@json_endpoint('GET', 'POST', public=True)
@cron_secret_required
def cron_process_outbox(request):
    counts = process_outbox()
    logger.info("Outbox run: %s", counts)
    return JsonResponse({'success': True, **counts, 'timestamp': timezone.now().isoformat()})
