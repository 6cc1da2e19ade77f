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
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('brand_name', models.CharField(max_length=255, verbose_name='brand name')),
                ('generic_name', models.CharField(max_length=255, verbose_name='generic name')),
                ('dosage', models.CharField(help_text='e.g. 500mg, 250mg/5ml', max_length=100, verbose_name='dosage')),
                ('category', models.CharField(db_index=True, max_length=100, verbose_name='category')),
                ('current_stock', models.PositiveIntegerField(default=0, editable=False, help_text='Derived: sum of batch quantities', verbose_name='current stock')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='unit price')),
                ('box_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='box price')),
                ('units_per_box', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)], verbose_name='units per box')),
                ('barcode', models.CharField(blank=True, max_length=64, null=True, unique=True, verbose_name='barcode')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
            ],
            options={
                'verbose_name': 'product',
                'verbose_name_plural': 'products',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['brand_name'], name='product_brand_idx'),
                    models.Index(fields=['generic_name'], name='product_generic_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(unit_price__gte=0), name='product_unit_price_non_negative'),
                    models.CheckConstraint(condition=models.Q(box_price__gte=0), name='product_box_price_non_negative'),
                    models.CheckConstraint(condition=models.Q(units_per_box__gte=1), name='product_units_per_box_positive'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Batch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(verbose_name='position')),
                ('batch_number', models.CharField(max_length=100, verbose_name='batch number')),
                ('quantity', models.PositiveIntegerField(verbose_name='quantity')),
                ('expiry_date', models.DateField(db_index=True, verbose_name='expiry date')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='batches', to='inventory.product', verbose_name='product')),
            ],
            options={
                'verbose_name': 'batch',
                'verbose_name_plural': 'batches',
                'ordering': ['position'],
                'constraints': [
                    models.UniqueConstraint(fields=('product', 'position'), name='unique_batch_position_per_product'),
                ],
            },
        ),
    ]
