# apps/core/models.py
from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver


class UserProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')

    display_name = models.CharField(max_length=150, blank=True)
    timezone = models.CharField(max_length=64, default='Europe/Prague')
    language = models.CharField(max_length=8, default='cs')

    # Daily window used by the game views
    day_start_hour = models.TimeField(default="06:00")
    day_end_hour = models.TimeField(default="22:00")

    email_notifications = models.BooleanField(default=True)
    settings = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Profile of {self.user.username}"


# Every new user gets a profile
@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    if created:
        UserProfile.objects.create(user=instance)


class GoogleCredentials(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='google_creds')
    token = models.TextField()  # access token
    refresh_token = models.TextField(null=True)
    token_uri = models.CharField(max_length=255)
    client_id = models.CharField(max_length=255)
    client_secret = models.CharField(max_length=255)
    scopes = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Google Creds for {self.user.username}"


class OutboxMessage(models.Model):
    """Side effect (e-mail, task-board sync) waiting for delivery."""

    class Kind(models.TextChoices):
        EMAIL = 'email', 'E-mail'
        TASKBOARD_LEAD = 'taskboard.lead', 'Task board: lead'
        TASKBOARD_BOOKING = 'taskboard.booking', 'Task board: rezervace'

    class Status(models.TextChoices):
        PENDING = 'pending', 'Čeká'
        SENT = 'sent', 'Odesláno'
        FAILED = 'failed', 'Selhalo'
        SKIPPED = 'skipped', 'Přeskočeno'

    kind = models.CharField(max_length=32, choices=Kind.choices)
    payload = models.JSONField(default=dict)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [models.Index(fields=['status', 'created_at'], name='outbox_status_created_idx')]

    def __str__(self):
        return f"{self.kind} [{self.status}]"
