import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Sale',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('product_id', models.UUIDField(db_index=True, help_text='UUID of the product sold; resolved in the application layer', verbose_name='product ID')),
                ('brand_name', models.CharField(max_length=255, verbose_name='brand name')),
                ('generic_name', models.CharField(blank=True, max_length=255, verbose_name='generic name')),
                ('quantity', models.PositiveIntegerField(verbose_name='quantity')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='unit price')),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='total amount')),
                ('batch_number', models.CharField(blank=True, max_length=100, null=True, verbose_name='batch number')),
                ('customer_name', models.CharField(blank=True, max_length=255, verbose_name='customer name')),
                ('payment_method', models.CharField(choices=[('Cash', 'Cash'), ('Card', 'Card'), ('Mobile', 'Mobile'), ('Credit', 'Credit')], default='Cash', max_length=10, verbose_name='payment method')),
                ('date', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='date')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
            ],
            options={
                'verbose_name': 'sale',
                'verbose_name_plural': 'sales',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['product_id', 'date'], name='sale_product_date_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(quantity__gt=0), name='sale_positive_quantity'),
                ],
            },
        ),
    ]
