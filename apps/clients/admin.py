from django.contrib import admin

from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """Admin interface for clients."""

    list_display = ['name', 'company', 'email', 'phone', 'user', 'created_at']
    search_fields = ['name', 'company', 'email', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    ordering = ['name']
