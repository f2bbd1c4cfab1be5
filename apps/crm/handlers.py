# apps/crm/handlers.py
from django.conf import settings
from django.utils import timezone

from apps.core.notifications import DeliverySkipped, register_handler
from .adapters.clickup import ClickUpClient
from .models import Booking, Lead


def clickup_client() -> ClickUpClient:
    client = ClickUpClient(settings.CLICKUP_API_TOKEN, settings.CLICKUP_LIST_ID)
    if not client.is_configured:
        raise DeliverySkipped("ClickUp is not configured")
    return client


@register_handler('taskboard.lead')
def sync_lead(payload: dict):
    lead = Lead.objects.filter(pk=payload['lead_id']).first()
    if lead is None:
        raise DeliverySkipped("Lead was deleted")
    if lead.taskboard_id:
        raise DeliverySkipped("Lead already mirrored")

    task = clickup_client().create_task(
        name=f"{lead.name} – Reach out",
        description_lines=[
            f"E-mail: {lead.email}",
            f"Telefon: {lead.phone}" if lead.phone else '',
            f"Zdroj: {lead.source}",
            lead.notes,
        ],
    )
    Lead.objects.filter(pk=lead.pk).update(taskboard_id=str(task.get('id', '')))


@register_handler('taskboard.booking')
def sync_booking(payload: dict):
    booking = Booking.objects.select_related('event', 'lead').filter(pk=payload['booking_id']).first()
    if booking is None:
        raise DeliverySkipped("Booking was deleted")

    local_start = timezone.localtime(booking.scheduled_at)
    task = clickup_client().create_task(
        name=f"{booking.name} – {booking.event.name if booking.event else 'Rezervace'}",
        description_lines=[
            f"Termín: {local_start:%d.%m.%Y %H:%M} ({booking.duration_minutes} min)",
            f"E-mail: {booking.email}",
            f"Telefon: {booking.phone}" if booking.phone else '',
            f"Poznámka: {booking.note}" if booking.note else '',
        ],
    )
    if booking.lead_id and not booking.lead.taskboard_id:
        Lead.objects.filter(pk=booking.lead_id).update(taskboard_id=str(task.get('id', '')))
