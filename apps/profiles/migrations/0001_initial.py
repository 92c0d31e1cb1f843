import uuid
from decimal import Decimal

import apps.core.validators
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('company_name', models.CharField(blank=True, max_length=200)),
                ('company_address', models.TextField(blank=True)),
                ('company_phone', models.CharField(blank=True, max_length=30, validators=[apps.core.validators.validate_phone_number])),
                ('company_email', models.EmailField(blank=True, max_length=254)),
                ('company_rccm', models.CharField(blank=True, max_length=100)),
                ('company_ncc', models.CharField(blank=True, max_length=100)),
                ('company_logo', models.TextField(blank=True)),
                ('company_signature', models.TextField(blank=True)),
                ('signature_type', models.CharField(choices=[('drawn', 'Dessinée'), ('uploaded', 'Importée')], default='drawn', max_length=10)),
                ('vat_enabled', models.BooleanField(default=True)),
                ('vat_rate', models.DecimalField(decimal_places=2, default=Decimal('20'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('default_currency', models.CharField(default='EUR', max_length=3)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'profiles',
            },
        ),
    ]
