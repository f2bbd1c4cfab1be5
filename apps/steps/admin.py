from django.contrib import admin
from .models import DailyStep


@admin.register(DailyStep)
class DailyStepAdmin(admin.ModelAdmin):
    list_display = ('title', 'date', 'completed', 'frequency', 'is_important', 'is_urgent', 'user')
    list_filter = ('completed', 'frequency', 'is_important', 'is_urgent')
    search_fields = ('title',)
    date_hierarchy = 'date'
    raw_id_fields = ('source_template',)
