from django.contrib import admin
from .models import Automation, Workflow

@admin.register(Workflow)
class WorkflowAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'trigger_time', 'enabled', 'user')
    list_filter = ('type', 'enabled')
    search_fields = ('name',)

@admin.register(Automation)
class AutomationAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'target_id', 'frequency_type', 'is_active', 'current_value', 'target_value')
    list_filter = ('type', 'frequency_type', 'is_active')
    search_fields = ('name',)
