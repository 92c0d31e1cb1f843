from rest_framework import serializers

from .models import ActivationCode, CodeStatus


class ActivationCodeSerializer(serializers.ModelSerializer):
    """Full activation code, for administrators."""

    created_by_email = serializers.SerializerMethodField()
    activated_by_email = serializers.SerializerMethodField()

    class Meta:
        model = ActivationCode
        fields = [
            'id',
            'code',
            'status',
            'created_at',
            'created_by_email',
            'sold_at',
            'customer_name',
            'customer_contact',
            'activated_at',
            'activated_by_email',
            'device_fingerprint',
            'revoked_at',
            'revocation_reason',
        ]
        read_only_fields = fields

    def get_created_by_email(self, obj):
        return obj.created_by.email if obj.created_by else None

    def get_activated_by_email(self, obj):
        return obj.activated_by.email if obj.activated_by else None


class ActivationCodeFilterSerializer(serializers.Serializer):
    """Query parameters of the admin code listing."""

    search = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=CodeStatus.choices, required=False)
    sort_by = serializers.ChoiceField(choices=['date', 'status', 'code'], required=False, default='date')
    direction = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')


class GenerateCodesSerializer(serializers.Serializer):
    count = serializers.IntegerField(min_value=1, max_value=100, default=1)


class SellCodeSerializer(serializers.Serializer):
    customer_contact = serializers.CharField(max_length=200)
    customer_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class RevokeCodeSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class DeviceHintsSerializer(serializers.Serializer):
    """Browser values used to fingerprint the device."""

    user_agent = serializers.CharField(required=False, allow_blank=True)
    screen_width = serializers.IntegerField(required=False, min_value=0)
    screen_height = serializers.IntegerField(required=False, min_value=0)
    language = serializers.CharField(required=False, allow_blank=True)
    timezone = serializers.CharField(required=False, allow_blank=True)


class ActivateCodeSerializer(serializers.Serializer):
    # Format is checked by the service so malformed codes are not counted
    code = serializers.CharField(max_length=50, allow_blank=True)
    device = DeviceHintsSerializer(required=False)


class PremiumStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
    activated_at = serializers.DateTimeField(allow_null=True)
    code_suffix = serializers.CharField(allow_null=True)
    device_match = serializers.BooleanField()


class QuotaInfoSerializer(serializers.Serializer):
    used = serializers.IntegerField()
    remaining = serializers.IntegerField(allow_null=True)
    total = serializers.IntegerField(allow_null=True)
    can_create_quote = serializers.BooleanField()
    is_premium = serializers.BooleanField()


class BlockStatusSerializer(serializers.Serializer):
    is_blocked = serializers.BooleanField()
    attempts = serializers.IntegerField()
    remaining_attempts = serializers.IntegerField()
    remaining_hours = serializers.IntegerField()


class CodeStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    available = serializers.IntegerField()
    sold = serializers.IntegerField()
    used = serializers.IntegerField()
    revoked = serializers.IntegerField()
