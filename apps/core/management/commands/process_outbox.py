from django.core.management.base import BaseCommand

from apps.core.notifications import process_outbox


class Command(BaseCommand):
    help = 'Retries pending outbox messages (e-mails, task-board sync)'

    def add_arguments(self, parser):
        parser.add_argument('--limit', type=int, default=100)

    def handle(self, *args, **options):
        counts = process_outbox(limit=options['limit'])
        self.stdout.write(self.style.SUCCESS(
            f"Sent {counts['sent']}, skipped {counts['skipped']}, failed {counts['failed']}, "
            f"still pending {counts['pending']}."
        ))
