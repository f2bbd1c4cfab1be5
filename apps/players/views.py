from django.http import JsonResponse

from apps.core.api import bind_form, json_endpoint, model_to_json, parse_json
from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from .forms import PlayerForm
from .models import Player


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def player_view(request):
    user = request.user
    # One player per user; there is no id to pass around
    player = Player.objects.filter(user=user).first()

    if request.method == 'GET':
        return JsonResponse({'player': model_to_json(player) if player else None})

    if request.method == 'DELETE':
        if player is None:
            raise NotFound('Player not found')
        player.delete()
        return JsonResponse({'success': True})

    payload = parse_json(request)

    if request.method == 'POST':
        if player is not None:
            raise Conflict('Player already exists')
        if not payload.get('name'):
            raise ValidationFailed('name is required')
        player = bind_form(PlayerForm, payload, user).save()
        return JsonResponse({'player': model_to_json(player)}, status=201)

    if player is None:
        raise NotFound('Player not found')
    player = bind_form(PlayerForm, payload, user, instance=player).save()
    return JsonResponse({'player': model_to_json(player)})
