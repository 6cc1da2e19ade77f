"""
Core — Audit Service

Provides methods for writing audit log entries from any app.

@file core/services.py
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from django.forms.models import model_to_dict

from core.models import AuditLog

logger = logging.getLogger('pharmaledger')


class AuditService:
    """Centralised audit logging for every write operation."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id: str,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog:
        if actor is not None and not getattr(actor, 'is_authenticated', False):
            actor = None
        return AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
        )

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """
        Serialise a model instance to a plain dict suitable for JSON
        storage. Dates are ISO-formatted, UUIDs and Decimals stringified.
        """
        data = model_to_dict(instance, fields=fields)
        return {key: AuditService.jsonable(value) for key, value in data.items()}

    @staticmethod
    def jsonable(value):
        if value is None:
            return None
        if isinstance(value, Decimal):
            return str(value)
        if hasattr(value, 'isoformat'):
            return value.isoformat()
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, (list, tuple)):
            return [AuditService.jsonable(v) for v in value]
        if isinstance(value, dict):
            return {k: AuditService.jsonable(v) for k, v in value.items()}
        return value
