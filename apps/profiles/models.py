from decimal import Decimal

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid

from apps.core.validators import validate_phone_number


class SignatureType(models.TextChoices):
    DRAWN = 'drawn', 'Dessinée'
    UPLOADED = 'uploaded', 'Importée'


class Profile(models.Model):
    """Company profile printed on every quote of its owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='profile')

    company_name = models.CharField(max_length=200, blank=True)
    company_address = models.TextField(blank=True)
    company_phone = models.CharField(max_length=30, blank=True, validators=[validate_phone_number])
    company_email = models.EmailField(blank=True)
    # Trade register and tax identifiers
    company_rccm = models.CharField(max_length=100, blank=True)
    company_ncc = models.CharField(max_length=100, blank=True)

    # URL or data URL
    company_logo = models.TextField(blank=True)
    company_signature = models.TextField(blank=True)
    signature_type = models.CharField(
        max_length=10,
        choices=SignatureType.choices,
        default=SignatureType.DRAWN,
    )

    vat_enabled = models.BooleanField(default=True)
    vat_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('20'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    default_currency = models.CharField(max_length=3, default='EUR')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'

    def __str__(self):
        return self.company_name or f"Profile of {self.user}"

    @property
    def effective_vat_rate(self):
        """VAT rate applied to new quote lines."""
        return self.vat_rate if self.vat_enabled else Decimal('0')
