"""Double opt-in newsletter and campaigns."""

from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone

from apps.core.models import OutboxMessage
from apps.newsletter import services
from apps.newsletter.models import Campaign, Subscriber


def emails(template):
    return [m for m in OutboxMessage.objects.filter(kind='email') if m.payload['template'] == template]


@pytest.mark.django_db
class TestSubscription:
    """subscribe / confirm / unsubscribe"""

    def test_subscribe_queues_confirmation_and_notice(self, anon_api):
        response = anon_api.post('/api/newsletter/subscribe', {'email': ' Ctenar@Example.com ', 'source': 'blog'})

        assert response.status_code == 201
        assert response.json()['status'] == 'pending'
        subscriber = Subscriber.objects.get()
        assert subscriber.email == 'ctenar@example.com'

        confirm = emails('newsletter_confirm')[0]
        assert confirm.payload['to'] == ['ctenar@example.com']
        assert confirm.payload['context']['confirm_url'] == (
            f'https://pokrok.test/api/newsletter/confirm?token={subscriber.confirm_token}'
        )
        assert emails('newsletter_admin_notice')[0].payload['to'] == ['admin@example.com']

    def test_invalid_email(self, anon_api):
        assert anon_api.post('/api/newsletter/subscribe', {'email': 'nope'}).status_code == 400
        assert anon_api.post('/api/newsletter/subscribe', {}).status_code == 400

    def test_confirmed_subscriber_conflicts(self, anon_api):
        Subscriber.objects.create(email='a@example.com', status=Subscriber.StatusChoices.CONFIRMED)
        assert anon_api.post('/api/newsletter/subscribe', {'email': 'a@example.com'}).status_code == 409

    def test_resubscribe_issues_a_new_token(self, anon_api):
        old = Subscriber.objects.create(email='a@example.com', status=Subscriber.StatusChoices.UNSUBSCRIBED)

        assert anon_api.post('/api/newsletter/subscribe', {'email': 'a@example.com'}).status_code == 201

        subscriber = Subscriber.objects.get()
        assert subscriber.status == Subscriber.StatusChoices.PENDING
        assert subscriber.confirm_token != old.confirm_token

    def test_confirm(self, anon_api, django_capture_on_commit_callbacks):
        subscriber = Subscriber.objects.create(email='a@example.com')

        with django_capture_on_commit_callbacks(execute=True):
            response = anon_api.get('/api/newsletter/confirm', {'token': subscriber.confirm_token})

        assert response.status_code == 200
        subscriber.refresh_from_db()
        assert subscriber.status == Subscriber.StatusChoices.CONFIRMED
        assert subscriber.confirmed_at is not None
        assert mail.outbox[0].to == ['a@example.com']
        assert subscriber.unsubscribe_token in mail.outbox[0].body

    def test_confirm_twice_sends_one_welcome(self, anon_api):
        subscriber = Subscriber.objects.create(email='a@example.com')

        anon_api.get('/api/newsletter/confirm', {'token': subscriber.confirm_token})
        anon_api.get('/api/newsletter/confirm', {'token': subscriber.confirm_token})

        assert len(emails('newsletter_welcome')) == 1

    def test_confirm_unknown_token(self, anon_api):
        assert anon_api.get('/api/newsletter/confirm', {'token': 'nope'}).status_code == 404
        assert anon_api.get('/api/newsletter/confirm').status_code == 400

    def test_unsubscribe(self, anon_api):
        subscriber = Subscriber.objects.create(email='a@example.com', status=Subscriber.StatusChoices.CONFIRMED)

        response = anon_api.post('/api/newsletter/unsubscribe', {'token': subscriber.unsubscribe_token})

        assert response.status_code == 200
        subscriber.refresh_from_db()
        assert subscriber.status == Subscriber.StatusChoices.UNSUBSCRIBED

    def test_unsubscribe_unknown_token(self, anon_api):
        assert anon_api.post('/api/newsletter/unsubscribe', {'token': 'nope'}).status_code == 404


@pytest.mark.django_db
class TestCampaignAdmin:
    """/api/admin/newsletter-campaigns"""

    def test_staff_only(self, api, anon_api):
        assert api.get('/api/admin/newsletter-campaigns').status_code == 403
        assert anon_api.get('/api/admin/newsletter-campaigns').status_code == 401

    def test_create_normalizes_sections(self, staff_api):
        response = staff_api.post('/api/admin/newsletter-campaigns', {
            'subject': 'Březen',
            'sections': [{'title': 'Novinky', 'extra': 1}],
        })

        assert response.status_code == 201
        assert response.json()['status'] == 'draft'
        assert response.json()['sections'] == [{'title': 'Novinky', 'description': ''}]

    @pytest.mark.parametrize('payload', [
        {'subject': ''},
        {'subject': 'X', 'sections': [{'description': 'bez titulku'}]},
        {'subject': 'X', 'sections': 'text'},
        {'subject': 'X', 'status': 'scheduled'},
        {'subject': 'X', 'status': 'archived'},
    ])
    def test_invalid_campaigns(self, staff_api, payload):
        assert staff_api.post('/api/admin/newsletter-campaigns', payload).status_code == 400

    def test_sent_campaign_is_frozen(self, staff_api):
        campaign = Campaign.objects.create(subject='Hotovo', status=Campaign.StatusChoices.SENT)

        response = staff_api.put('/api/admin/newsletter-campaigns', {'id': campaign.id, 'subject': 'Jinak'})

        assert response.status_code == 409

    def test_update_and_delete(self, staff_api):
        campaign = Campaign.objects.create(subject='Koncept')

        response = staff_api.put('/api/admin/newsletter-campaigns', {'id': campaign.id, 'show_on_blog': True})
        assert response.status_code == 200
        assert response.json()['subject'] == 'Koncept'
        assert response.json()['show_on_blog'] is True

        assert staff_api.delete('/api/admin/newsletter-campaigns', {'id': campaign.id}).status_code == 200
        assert not Campaign.objects.exists()

    def test_send_now(self, staff_api):
        Subscriber.objects.create(email='a@example.com', status=Subscriber.StatusChoices.CONFIRMED)
        Subscriber.objects.create(email='b@example.com')
        campaign = Campaign.objects.create(subject='Teď')

        response = staff_api.post('/api/admin/newsletter-campaigns/send', {'id': campaign.id})

        assert response.json()['recipients'] == 1
        campaign.refresh_from_db()
        assert campaign.status == Campaign.StatusChoices.SENT
        assert staff_api.post('/api/admin/newsletter-campaigns/send', {'id': campaign.id}).status_code == 409


@pytest.mark.django_db
class TestCampaignDelivery:
    """Scheduled sending and the public archive."""

    def test_due_campaigns_go_out(self, anon_api, cron_headers, django_capture_on_commit_callbacks):
        Subscriber.objects.create(email='a@example.com', status=Subscriber.StatusChoices.CONFIRMED)
        Subscriber.objects.create(email='gone@example.com', status=Subscriber.StatusChoices.UNSUBSCRIBED)
        due = Campaign.objects.create(subject='Due', status=Campaign.StatusChoices.SCHEDULED,
                                      scheduled_at=timezone.now() - timedelta(minutes=5),
                                      sections=[{'title': 'Tip týdne', 'description': 'Pijte vodu'}])
        later = Campaign.objects.create(subject='Later', status=Campaign.StatusChoices.SCHEDULED,
                                        scheduled_at=timezone.now() + timedelta(days=1))

        with django_capture_on_commit_callbacks(execute=True):
            body = anon_api.get('/api/cron/send-newsletters', **cron_headers).json()

        assert (body['sent'], body['recipients']) == (1, 1)
        assert mail.outbox[0].subject == 'Due'
        assert 'Tip týdne' in mail.outbox[0].body
        due.refresh_from_db()
        later.refresh_from_db()
        assert due.status == Campaign.StatusChoices.SENT
        assert later.status == Campaign.StatusChoices.SCHEDULED

    def test_campaign_goes_out_once(self):
        Subscriber.objects.create(email='a@example.com', status=Subscriber.StatusChoices.CONFIRMED)
        campaign = Campaign.objects.create(subject='Jednou', status=Campaign.StatusChoices.SCHEDULED,
                                           scheduled_at=timezone.now() - timedelta(minutes=5))
        stale = Campaign.objects.get(pk=campaign.pk)

        assert services.send_campaign(campaign) == 1
        assert services.send_campaign(stale) is None
        assert services.send_due_campaigns()['sent'] == 0
        assert len(emails('newsletter_campaign')) == 1

    def test_cron_requires_secret(self, anon_api):
        assert anon_api.get('/api/cron/send-newsletters').status_code == 401

    def test_drafts_are_never_sent(self):
        Campaign.objects.create(subject='Draft', scheduled_at=timezone.now() - timedelta(days=1))
        assert services.send_due_campaigns()['sent'] == 0

    def test_public_archive(self, anon_api):
        shown = Campaign.objects.create(subject='Veřejná', status=Campaign.StatusChoices.SENT,
                                        show_on_blog=True, sent_at=timezone.now())
        Campaign.objects.create(subject='Interní', status=Campaign.StatusChoices.SENT, sent_at=timezone.now())
        Campaign.objects.create(subject='Koncept', show_on_blog=True)

        body = anon_api.get('/api/newsletter/campaigns').json()
        assert [c['subject'] for c in body['campaigns']] == ['Veřejná']

        detail = anon_api.get('/api/newsletter/campaigns', {'id': shown.id}).json()
        assert detail['campaign']['id'] == shown.id

    def test_hidden_campaign_detail_is_404(self, anon_api):
        hidden = Campaign.objects.create(subject='Interní', status=Campaign.StatusChoices.SENT)
        assert anon_api.get('/api/newsletter/campaigns', {'id': hidden.id}).status_code == 404
