"""
Core — Base Models & Audit Infrastructure

Provides reusable abstract models for timestamps and actor tracking,
plus the AuditLog model that records every write to the inventory
ledger.

@file core/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


# ---------------------------------------------------------------------------
# Abstract base models (mixins)
# ---------------------------------------------------------------------------

class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class AuditFieldsMixin(models.Model):
    """Adds created_by / updated_by foreign keys for actor tracking."""

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('updated by'),
    )

    class Meta:
        abstract = True


class BaseModel(TimestampMixin, AuditFieldsMixin):
    """
    Standard base for all PharmaLedger models.
    UUID PK + timestamps + actor audit fields.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Audit Log — immutable record of every write operation
# ---------------------------------------------------------------------------

class AuditLog(models.Model):
    """
    Immutable audit trail. One row per create / update / delete of a
    product, stock intake or recorded sale.

    Stores old and new values as JSON for full diff capability.
    """

    class ActionChoices(models.TextChoices):
        CREATE = 'CREATE', _('Create')
        UPDATE = 'UPDATE', _('Update')
        DELETE = 'DELETE', _('Delete')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='audit_logs',
        verbose_name=_('actor'),
    )
    action = models.CharField(
        _('action'), max_length=20,
        choices=ActionChoices.choices, db_index=True,
    )
    model_name = models.CharField(_('model'), max_length=100, db_index=True)
    object_id = models.CharField(_('object ID'), max_length=40, db_index=True)

    old_values = models.JSONField(_('old values'), null=True, blank=True)
    new_values = models.JSONField(_('new values'), null=True, blank=True)

    timestamp = models.DateTimeField(_('timestamp'), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('audit log')
        verbose_name_plural = _('audit logs')
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['model_name', 'object_id'], name='audit_model_object_idx'),
            models.Index(fields=['actor', 'timestamp'], name='audit_actor_ts_idx'),
        ]

    def __str__(self):
        return f'{self.action} {self.model_name}:{self.object_id} by {self.actor_id}'
