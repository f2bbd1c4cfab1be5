# apps/core/notifications/outbox.py
"""
Best-effort side effects.

A message is stored in the same transaction as the primary write and handed to
its handler once that transaction commits. A failing handler never reaches the
caller: the error is logged, recorded on the row, and the cron retry picks the
message up until OUTBOX_MAX_ATTEMPTS is reached.
"""
import logging
from typing import Callable, Dict

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.core.models import OutboxMessage

logger = logging.getLogger(__name__)

_handlers: Dict[str, Callable[[dict], None]] = {}


class DeliverySkipped(Exception):
    """Raised by a handler when the integration is not configured."""


def register_handler(kind: str):
    def decorator(func):
        _handlers[kind] = func
        return func
    return decorator


def enqueue(kind: str, payload: dict) -> OutboxMessage:
    message = OutboxMessage.objects.create(kind=kind, payload=payload)
    transaction.on_commit(lambda: deliver(message.pk))
    return message


def deliver(message_id: int) -> str:
    """Runs the handler for one pending message and returns the new status."""
    message = OutboxMessage.objects.filter(pk=message_id, status=OutboxMessage.Status.PENDING).first()
    if message is None:
        return ''

    handler = _handlers.get(message.kind)
    message.attempts += 1

    if handler is None:
        message.status = OutboxMessage.Status.FAILED
        message.last_error = f"No handler for {message.kind}"
        logger.error("Outbox message %s has no handler for kind %s", message.pk, message.kind)
        message.save(update_fields=['status', 'attempts', 'last_error'])
        return message.status

    try:
        handler(message.payload)
    except DeliverySkipped as exc:
        message.status = OutboxMessage.Status.SKIPPED
        message.last_error = str(exc)
        logger.info("Outbox message %s skipped: %s", message.pk, exc)
    except Exception as exc:
        message.last_error = str(exc)
        if message.attempts >= settings.OUTBOX_MAX_ATTEMPTS:
            message.status = OutboxMessage.Status.FAILED
        logger.warning(
            "Outbox message %s (%s) failed on attempt %s: %s",
            message.pk, message.kind, message.attempts, exc,
        )
    else:
        message.status = OutboxMessage.Status.SENT
        message.sent_at = timezone.now()
        message.last_error = ''

    message.save(update_fields=['status', 'attempts', 'last_error', 'sent_at'])
    return message.status


def process_outbox(limit: int = 100) -> dict:
    """Retries pending messages, oldest first."""
    counts = {'sent': 0, 'failed': 0, 'skipped': 0, 'pending': 0}
    pending = OutboxMessage.objects.filter(
        status=OutboxMessage.Status.PENDING,
        attempts__lt=settings.OUTBOX_MAX_ATTEMPTS,
    ).values_list('pk', flat=True)[:limit]

    for message_id in list(pending):
        status = deliver(message_id)
        if status in counts:
            counts[status] += 1

    return counts
