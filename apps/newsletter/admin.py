from django.contrib import admin
from .models import Campaign, Subscriber


@admin.register(Subscriber)
class SubscriberAdmin(admin.ModelAdmin):
    list_display = ('email', 'status', 'source', 'confirmed_at', 'created_at')
    list_filter = ('status', 'source')
    search_fields = ('email',)
    readonly_fields = ('confirm_token', 'unsubscribe_token')


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    list_display = ('subject', 'status', 'scheduled_at', 'sent_at', 'show_on_blog')
    list_filter = ('status', 'show_on_blog')
    search_fields = ('subject', 'description')
