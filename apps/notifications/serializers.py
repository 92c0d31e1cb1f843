from rest_framework import serializers

from .models import NotificationPreferences


class NotificationPreferencesSerializer(serializers.ModelSerializer):

    class Meta:
        model = NotificationPreferences
        fields = [
            'email_notifications',
            'new_quotes_notifications',
            'accepted_quotes_notifications',
            'updated_at',
        ]
        read_only_fields = ['updated_at']
