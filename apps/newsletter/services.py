# apps/newsletter/services.py
import logging
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from apps.core.notifications import queue_email
from .models import Campaign, Subscriber, new_token

logger = logging.getLogger(__name__)


def subscribe(email, source='') -> Subscriber:
    email = str(email or '').strip().lower()
    try:
        validate_email(email)
    except ValidationError:
        raise ValidationFailed('Invalid e-mail')

    with transaction.atomic():
        subscriber = Subscriber.objects.select_for_update().filter(email=email).first()
        if subscriber and subscriber.status == Subscriber.StatusChoices.CONFIRMED:
            raise Conflict('This e-mail is already subscribed')

        if subscriber is None:
            subscriber = Subscriber.objects.create(email=email, source=source or '')
        else:
            # Pending or unsubscribed: start the double opt-in again
            subscriber.status = Subscriber.StatusChoices.PENDING
            subscriber.confirm_token = new_token()
            subscriber.save(update_fields=['status', 'confirm_token'])

        confirm_url = f"{settings.APP_URL}/api/newsletter/confirm?token={subscriber.confirm_token}"
        queue_email(email, 'Potvrďte odběr newsletteru', 'newsletter_confirm', {'confirm_url': confirm_url})
        if settings.ADMIN_EMAIL:
            queue_email(settings.ADMIN_EMAIL, f'Nový odběratel: {email}', 'newsletter_admin_notice',
                        {'email': email, 'source': subscriber.source})

    logger.info("Newsletter subscription pending for %s", email)
    return subscriber


def confirm(token) -> Subscriber:
    if not token:
        raise ValidationFailed('token is required')

    with transaction.atomic():
        subscriber = Subscriber.objects.select_for_update().filter(confirm_token=token).first()
        if subscriber is None:
            raise NotFound('Unknown token')
        if subscriber.status != Subscriber.StatusChoices.CONFIRMED:
            subscriber.status = Subscriber.StatusChoices.CONFIRMED
            subscriber.confirmed_at = timezone.now()
            subscriber.save(update_fields=['status', 'confirmed_at'])
            queue_email(subscriber.email, 'Vítejte v newsletteru', 'newsletter_welcome',
                        {'unsubscribe_url': unsubscribe_url(subscriber)})
    return subscriber


def unsubscribe(token) -> Subscriber:
    if not token:
        raise ValidationFailed('token is required')
    subscriber = Subscriber.objects.filter(unsubscribe_token=token).first()
    if subscriber is None:
        raise NotFound('Unknown token')
    if subscriber.status != Subscriber.StatusChoices.UNSUBSCRIBED:
        subscriber.status = Subscriber.StatusChoices.UNSUBSCRIBED
        subscriber.save(update_fields=['status'])
        logger.info("Subscriber %s unsubscribed", subscriber.pk)
    return subscriber


def unsubscribe_url(subscriber) -> str:
    return f"{settings.APP_URL}/newsletter/unsubscribe?token={subscriber.unsubscribe_token}"


def send_campaign(campaign: Campaign) -> Optional[int]:
    """Queues the campaign for every confirmed subscriber and marks it sent.

    Returns the recipient count, or None when the campaign already went out.
    """
    subscribers = Subscriber.objects.filter(status=Subscriber.StatusChoices.CONFIRMED)

    with transaction.atomic():
        # Concurrent senders wait here and then see SENT
        campaign = Campaign.objects.select_for_update().get(pk=campaign.pk)
        if campaign.status == Campaign.StatusChoices.SENT:
            logger.info("Campaign %s was already sent", campaign.pk)
            return None

        count = 0
        for subscriber in subscribers:
            queue_email(subscriber.email, campaign.subject, 'newsletter_campaign', {
                'subject': campaign.subject,
                'sender': campaign.sender,
                'description': campaign.description,
                'sections': campaign.sections,
                'unsubscribe_url': unsubscribe_url(subscriber),
            })
            count += 1

        campaign.status = Campaign.StatusChoices.SENT
        campaign.sent_at = timezone.now()
        campaign.save(update_fields=['status', 'sent_at', 'updated_at'])

    logger.info("Campaign %s queued for %s subscribers", campaign.pk, count)
    return count


def send_due_campaigns(now=None) -> dict:
    now = now or timezone.now()
    due = Campaign.objects.filter(
        status=Campaign.StatusChoices.SCHEDULED,
        scheduled_at__lte=now,
    ).order_by('scheduled_at')

    result = {'sent': 0, 'recipients': 0, 'errors': []}
    for campaign in due:
        try:
            recipients = send_campaign(campaign)
        except Exception as e:
            logger.error("Sending campaign %s failed: %s", campaign.pk, e)
            result['errors'].append({'campaignId': campaign.pk, 'error': str(e)})
            continue
        if recipients is None:
            continue
        result['sent'] += 1
        result['recipients'] += recipients
    return result
