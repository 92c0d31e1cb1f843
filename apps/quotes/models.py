from decimal import Decimal

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


class QuoteStatus(models.TextChoices):
    DRAFT = 'draft', 'Brouillon'
    SENT = 'sent', 'Envoyé'
    PENDING = 'pending', 'En attente'
    ACCEPTED = 'accepted', 'Accepté'
    REJECTED = 'rejected', 'Refusé'


class QuoteTemplate(models.TextChoices):
    CLASSIC = 'classic', 'Classique'
    MODERN = 'modern', 'Moderne'
    MINIMAL = 'minimal', 'Minimal'
    CORPORATE = 'corporate', 'Corporate'
    CREATIF = 'creatif', 'Créatif'
    ARTISAN = 'artisan', 'Artisan'
    ELEGANT = 'elegant', 'Élégant'
    PROFESSIONNEL = 'professionnel', 'Professionnel'
    MINIMALISTE = 'minimaliste', 'Minimaliste'


class Devis(models.Model):
    """
    A quote issued by a user to one of their clients.

    Totals are computed from the lines by the quote services and are
    never accepted from input.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='devis')
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='devis',
    )

    quote_number = models.CharField(max_length=20)
    date_creation = models.DateField()
    date_expiration = models.DateField()
    currency = models.CharField(max_length=3, default='EUR')
    template = models.CharField(
        max_length=20,
        choices=QuoteTemplate.choices,
        default=QuoteTemplate.CLASSIC,
    )
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=QuoteStatus.choices,
        default=QuoteStatus.DRAFT,
        db_index=True,
    )

    subtotal_ht = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    total_vat = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    total_ttc = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'devis'
        constraints = [
            models.UniqueConstraint(fields=['user', 'quote_number'], name='devis_unique_number_per_user'),
        ]
        indexes = [
            models.Index(fields=['user', '-created_at'], name='devis_user_created_idx'),
        ]
        ordering = ['-created_at']
        verbose_name = 'devis'
        verbose_name_plural = 'devis'

    def __str__(self):
        return self.quote_number

    @property
    def client_name(self):
        return self.client.name if self.client_id else ''


class ArticleDevis(models.Model):
    """One line of a quote."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    devis = models.ForeignKey(Devis, on_delete=models.CASCADE, related_name='articles')
    designation = models.CharField(max_length=500)
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    unit_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    vat_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    total_ht = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))
    order_index = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'articles_devis'
        ordering = ['order_index']

    def __str__(self):
        return f"{self.designation} x {self.quantity}"
