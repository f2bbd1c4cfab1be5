from django.contrib import admin
from .models import Player

@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'level', 'experience', 'energy')
    search_fields = ('name', 'user__username')
