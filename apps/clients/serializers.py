from rest_framework import serializers

from .models import Client


class ClientSerializer(serializers.ModelSerializer):
    """Client output."""

    class Meta:
        model = Client
        fields = ['id', 'name', 'company', 'email', 'phone', 'address', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ClientInputSerializer(serializers.ModelSerializer):
    """Validates client fields; ownership is never taken from input."""

    class Meta:
        model = Client
        fields = ['name', 'company', 'email', 'phone', 'address']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Le nom du client est requis')
        return value
