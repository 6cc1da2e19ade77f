import uuid

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
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete')], db_index=True, max_length=20, verbose_name='action')),
                ('model_name', models.CharField(db_index=True, max_length=100, verbose_name='model')),
                ('object_id', models.CharField(db_index=True, max_length=40, verbose_name='object ID')),
                ('old_values', models.JSONField(blank=True, null=True, verbose_name='old values')),
                ('new_values', models.JSONField(blank=True, null=True, verbose_name='new values')),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='timestamp')),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL, verbose_name='actor')),
            ],
            options={
                'verbose_name': 'audit log',
                'verbose_name_plural': 'audit logs',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['model_name', 'object_id'], name='audit_model_object_idx'),
                    models.Index(fields=['actor', 'timestamp'], name='audit_actor_ts_idx'),
                ],
            },
        ),
    ]
