from django.contrib import admin
from .models import Goal

@admin.register(Goal)
class GoalAdmin(admin.ModelAdmin):
    list_display = ('title', 'status', 'focus_status', 'focus_order', 'progress_percentage', 'user')
    list_filter = ('status', 'focus_status', 'priority', 'goal_type')
    search_fields = ('title',)
