from django.contrib import admin
from .models import Habit, HabitCompletion

@admin.register(Habit)
class HabitAdmin(admin.ModelAdmin):
    list_display = ('name', 'frequency', 'current_streak', 'longest_streak', 'last_completed_date', 'is_active')
    list_filter = ('is_active', 'frequency', 'difficulty')
    search_fields = ('name',)

@admin.register(HabitCompletion)
class HabitCompletionAdmin(admin.ModelAdmin):
    list_display = ('habit', 'date')
    list_filter = ('date', 'habit')
    search_fields = ('habit__name',)
