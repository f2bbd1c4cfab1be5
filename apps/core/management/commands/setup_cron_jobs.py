from urllib.parse import urlencode

import requests
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.core.adapters.cron_job_org import CronJobOrgClient, CronJobSpec

# (title, path, hours); hours=[-1] means every hour
CRON_ENDPOINTS = [
    ('Pokrok: recurring steps', '/api/cron/generate-recurring-instances', [0]),
    ('Pokrok: booking reminders', '/api/cron/send-booking-reminders', [-1]),
    ('Pokrok: newsletters', '/api/cron/send-newsletters', [-1]),
    ('Pokrok: outbox retry', '/api/cron/process-outbox', [-1]),
]


class Command(BaseCommand):
    help = 'Registers or updates the cron-job.org jobs that call /api/cron/* endpoints'

    def handle(self, *args, **options):
        if not settings.CRON_JOB_ORG_API_KEY:
            raise CommandError('CRON_JOB_ORG_API_KEY is not set')
        if not settings.CRON_SECRET:
            raise CommandError('CRON_SECRET is not set')

        client = CronJobOrgClient(settings.CRON_JOB_ORG_API_KEY)
        query = urlencode({'token': settings.CRON_SECRET})

        for title, path, hours in CRON_ENDPOINTS:
            spec = CronJobSpec(title=title, url=f'{settings.APP_URL}{path}?{query}', hours=hours)
            try:
                result = client.upsert(spec)
            except requests.RequestException as e:
                raise CommandError(f'{title}: {e}')
            self.stdout.write(self.style.SUCCESS(f"{result['action'].capitalize()} {title} (job {result['jobId']})"))
