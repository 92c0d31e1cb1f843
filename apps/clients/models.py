from django.db import models
import uuid

from apps.core.validators import validate_phone_number


class Client(models.Model):
    """Customer a quote is addressed to; private to its owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='clients')
    name = models.CharField(max_length=200)
    company = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True, validators=[validate_phone_number])
    address = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        indexes = [
            models.Index(fields=['user', 'name'], name='clients_user_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        if self.company:
            return f"{self.name} ({self.company})"
        return self.name
