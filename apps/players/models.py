from django.db import models
from django.conf import settings


class Player(models.Model):
    """The user's character in the game view."""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='player')
    name = models.CharField(max_length=100)

    class GenderChoices(models.TextChoices):
        MALE = 'male', 'Muž'
        FEMALE = 'female', 'Žena'
        OTHER = 'other', 'Jiné'

    gender = models.CharField(max_length=10, choices=GenderChoices.choices, default=GenderChoices.OTHER)
    avatar = models.CharField(max_length=255, blank=True)
    appearance = models.JSONField(default=dict, blank=True)

    level = models.PositiveIntegerField(default=1)
    experience = models.PositiveIntegerField(default=0)
    energy = models.PositiveIntegerField(default=100)

    # In-game clock
    current_day = models.PositiveIntegerField(default=1)
    current_time = models.TimeField(default="08:00")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} (lvl {self.level})"
