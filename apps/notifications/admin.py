from django.contrib import admin

from .models import NotificationPreferences


@admin.register(NotificationPreferences)
class NotificationPreferencesAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'email_notifications',
        'new_quotes_notifications',
        'accepted_quotes_notifications',
        'updated_at',
    ]
    list_filter = ['email_notifications', 'new_quotes_notifications', 'accepted_quotes_notifications']
    search_fields = ['user__email']
    raw_id_fields = ['user']
