from django.contrib import admin
from .models import Area, Milestone

@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    list_display = ('name', 'color', 'order', 'user')
    search_fields = ('name',)

@admin.register(Milestone)
class MilestoneAdmin(admin.ModelAdmin):
    list_display = ('id', 'area', 'progress', 'completed_date', 'user')
    list_filter = ('completed_date',)
    search_fields = ('area__name',)
