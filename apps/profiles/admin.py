from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin interface for company profiles."""

    list_display = ['company_name', 'user', 'company_email', 'vat_enabled', 'vat_rate', 'default_currency']
    list_filter = ['vat_enabled', 'default_currency']
    search_fields = ['company_name', 'company_email', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']

    fieldsets = (
        ('Company', {
            'fields': ('user', 'company_name', 'company_address', 'company_phone', 'company_email')
        }),
        ('Legal', {
            'fields': ('company_rccm', 'company_ncc')
        }),
        ('Branding', {
            'fields': ('company_logo', 'company_signature', 'signature_type'),
            'classes': ('collapse',)
        }),
        ('Billing', {
            'fields': ('vat_enabled', 'vat_rate', 'default_currency')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
