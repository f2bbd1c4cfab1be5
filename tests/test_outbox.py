"""Outbox delivery, retries and the cron guard around it."""

import pytest
from django.core import mail

from apps.core.models import OutboxMessage
from apps.core.notifications import DeliverySkipped, enqueue, process_outbox, queue_email, register_handler
from apps.core.notifications.outbox import deliver


@register_handler('test.flaky')
def flaky_handler(payload):
    if payload.get('fail'):
        raise RuntimeError('remote down')


@register_handler('test.skipped')
def skipped_handler(payload):
    raise DeliverySkipped('not configured')


@pytest.mark.django_db
class TestOutbox:
    """Best-effort side effects."""

    def test_email_is_sent_after_commit(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            message = queue_email('client@example.com', 'Ahoj', 'contact_message',
                                  {'name': 'Jana', 'email': 'jana@example.com', 'message': 'Dobrý den'})

        message.refresh_from_db()
        assert message.status == OutboxMessage.Status.SENT
        assert message.attempts == 1
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['client@example.com']
        assert 'Dobrý den' in mail.outbox[0].body

    def test_html_alternative_is_attached_when_present(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            queue_email('a@example.com', 'Potvrzení', 'newsletter_confirm', {'confirm_url': 'https://x/confirm'})

        assert mail.outbox[0].alternatives[0][1] == 'text/html'

    def test_nothing_is_delivered_before_commit(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            message = enqueue('test.flaky', {})

        assert len(callbacks) == 1
        message.refresh_from_db()
        assert message.status == OutboxMessage.Status.PENDING

    def test_failure_is_recorded_not_raised(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            message = enqueue('test.flaky', {'fail': True})

        message.refresh_from_db()
        assert message.status == OutboxMessage.Status.PENDING
        assert message.attempts == 1
        assert message.last_error == 'remote down'

    def test_retries_until_max_attempts(self, settings):
        settings.OUTBOX_MAX_ATTEMPTS = 2
        message = OutboxMessage.objects.create(kind='test.flaky', payload={'fail': True})

        assert process_outbox() == {'sent': 0, 'failed': 0, 'skipped': 0, 'pending': 1}
        assert process_outbox() == {'sent': 0, 'failed': 1, 'skipped': 0, 'pending': 0}
        assert process_outbox() == {'sent': 0, 'failed': 0, 'skipped': 0, 'pending': 0}

        message.refresh_from_db()
        assert message.status == OutboxMessage.Status.FAILED
        assert message.attempts == 2

    def test_skipped_handler(self):
        message = OutboxMessage.objects.create(kind='test.skipped', payload={})

        assert deliver(message.pk) == OutboxMessage.Status.SKIPPED

    def test_unknown_kind_fails(self):
        message = OutboxMessage.objects.create(kind='nobody.listens', payload={})

        assert deliver(message.pk) == OutboxMessage.Status.FAILED

    def test_sent_message_is_not_delivered_twice(self):
        message = OutboxMessage.objects.create(kind='test.flaky', payload={})
        deliver(message.pk)

        assert deliver(message.pk) == ''
        message.refresh_from_db()
        assert message.attempts == 1


@pytest.mark.django_db
class TestOutboxCron:
    """/api/cron/process-outbox"""

    url = '/api/cron/process-outbox'

    def test_requires_secret(self, anon_api):
        assert anon_api.post(self.url).status_code == 401

    def test_processes_pending(self, anon_api, cron_headers):
        OutboxMessage.objects.create(kind='test.flaky', payload={})

        body = anon_api.post(self.url, **cron_headers).json()

        assert body['success'] is True
        assert body['sent'] == 1
