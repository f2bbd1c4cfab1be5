# apps/core/api.py
"""Helpers shared by the JSON API views."""
import json
import logging
from functools import wraps

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.forms.models import model_to_dict
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .encryption import decrypt_fields
from .exceptions import ApiError, Forbidden, NotFound, Unauthorized, ValidationFailed

logger = logging.getLogger(__name__)


def error_response(exc: ApiError) -> JsonResponse:
    body = {'error': exc.message}
    if exc.details is not None:
        body['details'] = exc.details
    return JsonResponse(body, status=exc.status)


def json_endpoint(*methods, public=False):
    """
    Wraps an API view: method check, session check and error mapping.

    ApiError -> its own status, missing rows -> 404, anything else -> 500
    (exception text only in DEBUG).
    """
    def decorator(view):
        @csrf_exempt
        @require_http_methods(list(methods))
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if not public and not request.user.is_authenticated:
                return error_response(Unauthorized())
            try:
                return view(request, *args, **kwargs)
            except ApiError as exc:
                return error_response(exc)
            except (Http404, ObjectDoesNotExist):
                return error_response(NotFound())
            except Exception as exc:
                logger.exception("Unhandled error in %s %s", request.method, request.path)
                details = str(exc) if settings.DEBUG else None
                return error_response(ApiError(details=details))
        return wrapper
    return decorator


def parse_json(request) -> dict:
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationFailed('Invalid JSON body')
    if not isinstance(payload, dict):
        raise ValidationFailed('JSON body must be an object')
    return payload


def get_record_id(request, payload=None, key='id') -> int:
    """Reads the record id from the body or the query string."""
    raw = (payload or {}).get(key)
    if raw is None:
        raw = request.GET.get(key)
    return coerce_id(raw, key)


def coerce_id(raw, key='id') -> int:
    if raw in (None, ''):
        raise ValidationFailed(f'Missing {key}')
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationFailed(f'Invalid {key}')


def verify_ownership(model, pk, user, owner_field='user'):
    """Returns the row if the user owns it. Missing -> 404, foreign -> 403."""
    row = model.objects.filter(pk=pk).first()
    if row is None:
        raise NotFound(f'{model._meta.verbose_name.capitalize()} not found')
    if getattr(row, f'{owner_field}_id') != user.id:
        raise Forbidden()
    return row


def require_staff(user):
    if not user.is_staff:
        raise Forbidden('Admin access required')


def bind_form(form_class, payload: dict, user, instance=None):
    """
    Builds a bound, validated ModelForm from a JSON payload.

    Unknown keys are ignored and `<fk>_id` is accepted for `<fk>`. Without an
    instance the model defaults fill the gaps; with one, every key missing from
    the payload keeps its stored value and an explicit null clears it.
    """
    names = list(form_class.base_fields)
    base = instance if instance is not None else form_class._meta.model()
    data = model_to_dict(base, fields=names)

    encrypted = getattr(form_class, 'encrypted_fields', ())
    if instance is not None and encrypted:
        data = decrypt_fields(data, encrypted, instance.user_id)

    for key, value in payload.items():
        if key in names:
            data[key] = value
        elif key.endswith('_id') and key[:-3] in names:
            data[key[:-3]] = value

    form = form_class(user, data=data, instance=instance)
    if not form.is_valid():
        raise ValidationFailed('Validation failed', details=form.errors.get_json_data())
    return form


def model_to_json(instance, exclude=('user',), encrypted=()) -> dict:
    """Flat dict of concrete fields; foreign keys as `<name>_id`."""
    data = {'id': instance.pk}
    for field in instance._meta.concrete_fields:
        if field.name in exclude or field.primary_key:
            continue
        data[field.attname] = getattr(instance, field.attname)
    if encrypted:
        data = decrypt_fields(data, encrypted, instance.user_id)
    return data


def parse_bool(value):
    """Query-string flag: None when absent."""
    if value is None or value == '':
        return None
    return str(value).lower() in ('1', 'true', 'yes')


def apply_filter(filter_class, request, queryset):
    """Runs a django-filter FilterSet over the query string; bad input -> 400."""
    filterset = filter_class(request.GET, queryset=queryset, request=request)
    if not filterset.is_valid():
        raise ValidationFailed('Invalid filter', details=filterset.errors.get_json_data())
    return filterset.qs
