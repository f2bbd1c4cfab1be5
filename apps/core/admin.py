from django.contrib import admin
from .models import UserProfile, GoogleCredentials, OutboxMessage


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'display_name', 'timezone', 'language')
    search_fields = ('user__username', 'display_name')


@admin.register(GoogleCredentials)
class GoogleCredentialsAdmin(admin.ModelAdmin):
    list_display = ('user', 'updated_at')
    search_fields = ('user__username',)
    exclude = ('token', 'refresh_token', 'client_secret')


@admin.register(OutboxMessage)
class OutboxMessageAdmin(admin.ModelAdmin):
    list_display = ('kind', 'status', 'attempts', 'created_at', 'sent_at')
    list_filter = ('kind', 'status')
    search_fields = ('last_error',)
    readonly_fields = ('payload', 'last_error')
