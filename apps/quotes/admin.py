from django.contrib import admin

from .models import Devis, ArticleDevis


class ArticleDevisInline(admin.TabularInline):
    model = ArticleDevis
    extra = 0
    fields = ['order_index', 'designation', 'quantity', 'unit_price', 'vat_rate', 'total_ht']
    readonly_fields = ['total_ht']


@admin.register(Devis)
class DevisAdmin(admin.ModelAdmin):
    """Admin interface for quotes."""

    list_display = ['quote_number', 'user', 'client', 'status', 'total_ttc', 'currency', 'date_creation']
    list_filter = ['status', 'template', 'currency']
    search_fields = ['quote_number', 'user__email', 'client__name', 'client__company']
    readonly_fields = ['subtotal_ht', 'total_vat', 'total_ttc', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'client']
    date_hierarchy = 'date_creation'
    inlines = [ArticleDevisInline]
