from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.steps.adapters.orm_repositories import DjangoStepRepository
from apps.steps.domain.services import RecurrenceService


class Command(BaseCommand):
    help = 'Generates the next instance of every recurring step'

    def add_arguments(self, parser):
        parser.add_argument('--user', type=int, help='Only templates of this user id')
        parser.add_argument('--date', help='Run as if today were YYYY-MM-DD')

    def handle(self, *args, **options):
        today = timezone.localdate()
        if options['date']:
            try:
                today = date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError('--date must be YYYY-MM-DD')

        service = RecurrenceService(DjangoStepRepository(), lookahead_days=settings.RECURRENCE_LOOKAHEAD_DAYS)
        result = service.generate_instances(today=today, user_id=options['user'])

        self.stdout.write(self.style.SUCCESS(f'Created {result.created_count} recurring step instances.'))
        for step in result.created:
            self.stdout.write(f"- {step.title} ({step.date})")
        for template_id, error in result.errors:
            self.stderr.write(f"! template {template_id}: {error}")
