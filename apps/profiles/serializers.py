from rest_framework import serializers

from apps.quotes.currency import SUPPORTED_CURRENCIES
from .models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    """Company profile output."""

    class Meta:
        model = Profile
        fields = [
            'id',
            'company_name',
            'company_address',
            'company_phone',
            'company_email',
            'company_rccm',
            'company_ncc',
            'company_logo',
            'company_signature',
            'signature_type',
            'vat_enabled',
            'vat_rate',
            'default_currency',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ProfileInputSerializer(serializers.ModelSerializer):
    """Validates company fields before they reach the service."""

    default_currency = serializers.ChoiceField(
        choices=sorted(SUPPORTED_CURRENCIES),
        required=False,
    )

    class Meta:
        model = Profile
        fields = [
            'company_name',
            'company_address',
            'company_phone',
            'company_email',
            'company_rccm',
            'company_ncc',
            'company_logo',
            'company_signature',
            'signature_type',
            'vat_enabled',
            'vat_rate',
            'default_currency',
        ]
