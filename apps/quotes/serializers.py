from rest_framework import serializers

from apps.clients.serializers import ClientSerializer
from apps.core.validators import validate_phone_number

from .currency import format_currency, is_supported_currency
from .models import Devis, ArticleDevis, QuoteStatus, QuoteTemplate


# =============================================================================
# Output
# =============================================================================

class ArticleDevisSerializer(serializers.ModelSerializer):
    class Meta:
        model = ArticleDevis
        fields = ['id', 'designation', 'quantity', 'unit_price', 'vat_rate', 'total_ht', 'order_index']
        read_only_fields = fields


class DevisListSerializer(serializers.ModelSerializer):
    """Quote row of the listing, without lines."""

    client_name = serializers.CharField(read_only=True)
    status_label = serializers.CharField(source='get_status_display', read_only=True)
    total_ttc_display = serializers.SerializerMethodField()

    class Meta:
        model = Devis
        fields = [
            'id',
            'quote_number',
            'client_id',
            'client_name',
            'date_creation',
            'date_expiration',
            'currency',
            'template',
            'status',
            'status_label',
            'subtotal_ht',
            'total_vat',
            'total_ttc',
            'total_ttc_display',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_total_ttc_display(self, obj):
        return format_currency(obj.total_ttc, obj.currency)


class DevisSerializer(DevisListSerializer):
    """Full quote with client and lines."""

    client = ClientSerializer(read_only=True)
    articles = ArticleDevisSerializer(many=True, read_only=True)

    class Meta(DevisListSerializer.Meta):
        fields = DevisListSerializer.Meta.fields + ['client', 'notes', 'articles']
        read_only_fields = fields


# =============================================================================
# Input
# =============================================================================

class ArticleInputSerializer(serializers.Serializer):
    """A quote line; lines with a blank designation are ignored."""

    designation = serializers.CharField(max_length=500, allow_blank=True)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=1)
    unit_price = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, default=0)
    vat_rate = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=0,
        max_value=100,
        required=False,
        allow_null=True,
    )


class InlineClientSerializer(serializers.Serializer):
    """Client typed directly on the quote form."""

    name = serializers.CharField(max_length=200)
    company = serializers.CharField(max_length=200, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(
        max_length=30,
        required=False,
        allow_blank=True,
        validators=[validate_phone_number],
    )
    address = serializers.CharField(required=False, allow_blank=True)


class DevisInputSerializer(serializers.Serializer):
    """Quote header and lines. Numbers, owner and totals are never read from input."""

    client_id = serializers.UUIDField(required=False, allow_null=True)
    client = InlineClientSerializer(required=False)
    date_creation = serializers.DateField(required=False)
    date_expiration = serializers.DateField(required=False)
    currency = serializers.CharField(max_length=3, required=False)
    template = serializers.ChoiceField(choices=QuoteTemplate.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=QuoteStatus.choices, required=False)
    items = ArticleInputSerializer(many=True)

    def validate_currency(self, value):
        value = value.upper()
        if not is_supported_currency(value):
            raise serializers.ValidationError(f'Devise non prise en charge: {value}')
        return value

    def validate(self, attrs):
        creation = attrs.get('date_creation')
        expiration = attrs.get('date_expiration')
        if creation and expiration and expiration < creation:
            raise serializers.ValidationError({
                'date_expiration': "La date d'expiration précède la date de création",
            })
        return attrs


class QuoteFilterSerializer(serializers.Serializer):
    """Query parameters of the quote listing."""

    search = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=QuoteStatus.choices, required=False)
    date_range = serializers.ChoiceField(
        choices=['all', 'today', 'week', 'month', 'quarter'],
        required=False,
        default='all',
    )
    ordering = serializers.CharField(required=False, allow_blank=True)


class QuoteStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=QuoteStatus.choices)


class ShareEmailSerializer(serializers.Serializer):
    recipient = serializers.EmailField(required=False)
    subject = serializers.CharField(max_length=200, required=False, allow_blank=True)
    message = serializers.CharField(required=False, allow_blank=True)


class WhatsAppShareSerializer(serializers.Serializer):
    url = serializers.URLField()


class QuoteNumberSerializer(serializers.Serializer):
    quote_number = serializers.CharField()


class DashboardStatsSerializer(serializers.Serializer):
    total_quotes = serializers.IntegerField()
    quotes_this_month = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())
    revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    currency = serializers.CharField()
    active_clients = serializers.IntegerField()
    conversion_rate = serializers.IntegerField()
