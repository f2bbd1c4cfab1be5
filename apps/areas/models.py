# apps/areas/models.py
from django.db import models
from django.conf import settings


class Area(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='areas')
    name = models.CharField(max_length=100)  # e.g. Práce, Domov, Zdraví
    description = models.TextField(blank=True)
    color = models.CharField(max_length=7, default="#6c757d")  # HEX
    icon = models.CharField(max_length=50, default="folder", blank=True)
    order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return self.name


class Milestone(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='milestones')
    area = models.ForeignKey(Area, on_delete=models.CASCADE, related_name='milestones')

    # Stored encrypted
    title = models.TextField()
    description = models.TextField(blank=True)

    completed_date = models.DateField(null=True, blank=True)
    progress = models.PositiveIntegerField(default=0, help_text="Progress in percent (0-100)")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['completed_date', 'created_at']

    def __str__(self):
        return f"Milestone #{self.pk}"
