from django.contrib import admin
from django.utils.html import format_html

from .models import ActivationCode, CodeStatus, QuotaUsage
from .services import revoke_activation_code, InvalidCodeTransitionError


STATUS_COLORS = {
    CodeStatus.AVAILABLE: '#2E7D32',
    CodeStatus.SOLD: '#1565C0',
    CodeStatus.USED: '#6A1B9A',
    CodeStatus.REVOKED: '#C62828',
}


@admin.register(ActivationCode)
class ActivationCodeAdmin(admin.ModelAdmin):
    """Admin interface for premium activation codes."""

    list_display = [
        'code',
        'status_badge',
        'customer_contact',
        'activated_by',
        'created_at',
        'sold_at',
        'activated_at',
    ]
    list_filter = ['status', 'created_at', 'activated_at']
    search_fields = ['code', 'customer_contact', 'customer_name', 'activated_by__email']
    readonly_fields = [
        'code',
        'created_at',
        'created_by',
        'sold_at',
        'activated_at',
        'activated_by',
        'device_fingerprint',
        'revoked_at',
        'revoked_by',
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Code', {
            'fields': ('code', 'status', 'created_at', 'created_by')
        }),
        ('Sale', {
            'fields': ('sold_at', 'customer_name', 'customer_contact')
        }),
        ('Activation', {
            'fields': ('activated_at', 'activated_by', 'device_fingerprint')
        }),
        ('Revocation', {
            'fields': ('revoked_at', 'revoked_by', 'revocation_reason'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#999'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['revoke_codes']

    @admin.action(description='Revoke selected codes')
    def revoke_codes(self, request, queryset):
        count = 0
        for activation in queryset.exclude(status=CodeStatus.REVOKED):
            try:
                revoke_activation_code(
                    code=activation.code,
                    revoked_by=request.user,
                    reason='Revoked from admin',
                )
            except InvalidCodeTransitionError:
                continue
            count += 1
        self.message_user(request, f'Revoked {count} code(s).')


@admin.register(QuotaUsage)
class QuotaUsageAdmin(admin.ModelAdmin):
    """Admin interface for monthly quota usage."""

    list_display = ['user', 'year', 'month', 'quotes_created', 'updated_at']
    list_filter = ['year', 'month']
    search_fields = ['user__email']
    raw_id_fields = ['user']
    ordering = ['-year', '-month']
