from django.db import models
import uuid


class CodeStatus(models.TextChoices):
    AVAILABLE = 'AVAILABLE', 'Disponible'
    SOLD = 'SOLD', 'Vendu'
    USED = 'USED', 'Utilisé'
    REVOKED = 'REVOKED', 'Révoqué'


class ActivationCode(models.Model):
    """
    One-time premium licence.

    AVAILABLE -> SOLD -> USED, and any non-revoked state -> REVOKED.
    A USED code is bound to the activating user and device.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=20, unique=True)
    status = models.CharField(
        max_length=10,
        choices=CodeStatus.choices,
        default=CodeStatus.AVAILABLE,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='generated_activation_codes',
    )

    sold_at = models.DateTimeField(null=True, blank=True)
    customer_name = models.CharField(max_length=200, blank=True)
    customer_contact = models.CharField(max_length=200, blank=True)

    activated_at = models.DateTimeField(null=True, blank=True)
    activated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activation_codes',
    )
    device_fingerprint = models.CharField(max_length=64, blank=True)

    revoked_at = models.DateTimeField(null=True, blank=True)
    revoked_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='revoked_activation_codes',
    )
    revocation_reason = models.TextField(blank=True)

    class Meta:
        db_table = 'premium_activation_codes'
        indexes = [
            models.Index(fields=['activated_by', 'status'], name='premium_code_holder_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.code} ({self.status})"

    @property
    def masked_code(self):
        """Code reduced to its last 3 characters."""
        return f"***{self.code[-3:]}"


class QuotaUsage(models.Model):
    """Quotes created by a user during one calendar month."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='quota_usage')
    year = models.PositiveSmallIntegerField()
    month = models.PositiveSmallIntegerField()
    quotes_created = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_quota_usage'
        unique_together = [['user', 'year', 'month']]
        ordering = ['-year', '-month']

    def __str__(self):
        return f"{self.user} {self.year}-{self.month:02d}: {self.quotes_created}"
