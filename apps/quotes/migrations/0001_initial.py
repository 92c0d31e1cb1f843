import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('clients', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Devis',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quote_number', models.CharField(max_length=20)),
                ('date_creation', models.DateField()),
                ('date_expiration', models.DateField()),
                ('currency', models.CharField(default='EUR', max_length=3)),
                ('template', models.CharField(choices=[('classic', 'Classique'), ('modern', 'Moderne'), ('minimal', 'Minimal'), ('corporate', 'Corporate'), ('creatif', 'Créatif'), ('artisan', 'Artisan'), ('elegant', 'Élégant'), ('professionnel', 'Professionnel'), ('minimaliste', 'Minimaliste')], default='classic', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('draft', 'Brouillon'), ('sent', 'Envoyé'), ('pending', 'En attente'), ('accepted', 'Accepté'), ('rejected', 'Refusé')], db_index=True, default='draft', max_length=10)),
                ('subtotal_ht', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('total_vat', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('total_ttc', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='devis', to='clients.client')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='devis', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'devis',
                'verbose_name_plural': 'devis',
                'db_table': 'devis',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', '-created_at'], name='devis_user_created_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'quote_number'), name='devis_unique_number_per_user')],
            },
        ),
        migrations.CreateModel(
            name='ArticleDevis',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('designation', models.CharField(max_length=500)),
                ('quantity', models.DecimalField(decimal_places=2, default=Decimal('1'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('unit_price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('vat_rate', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('total_ht', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('order_index', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('devis', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='articles', to='quotes.devis')),
            ],
            options={
                'db_table': 'articles_devis',
                'ordering': ['order_index'],
            },
        ),
    ]
