# apps/newsletter/models.py
import secrets

from django.db import models


def new_token():
    return secrets.token_urlsafe(32)


class Subscriber(models.Model):
    email = models.EmailField(unique=True)

    class StatusChoices(models.TextChoices):
        PENDING = 'pending', 'Čeká na potvrzení'
        CONFIRMED = 'confirmed', 'Potvrzeno'
        UNSUBSCRIBED = 'unsubscribed', 'Odhlášeno'

    status = models.CharField(max_length=20, choices=StatusChoices.choices, default=StatusChoices.PENDING)
    confirm_token = models.CharField(max_length=64, unique=True, default=new_token)
    unsubscribe_token = models.CharField(max_length=64, unique=True, default=new_token)
    source = models.CharField(max_length=50, blank=True)

    confirmed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        self.email = (self.email or '').strip().lower()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.email} ({self.status})"


class Campaign(models.Model):
    subject = models.CharField(max_length=255)
    sender = models.CharField(max_length=255, blank=True)  # display name
    description = models.TextField(blank=True)
    # [{"title": "...", "description": "..."}, ...]
    sections = models.JSONField(default=list, blank=True)

    class StatusChoices(models.TextChoices):
        DRAFT = 'draft', 'Koncept'
        SCHEDULED = 'scheduled', 'Naplánováno'
        SENT = 'sent', 'Odesláno'

    status = models.CharField(max_length=20, choices=StatusChoices.choices, default=StatusChoices.DRAFT)
    scheduled_at = models.DateTimeField(null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    show_on_blog = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-scheduled_at', '-created_at']

    def __str__(self):
        return self.subject
