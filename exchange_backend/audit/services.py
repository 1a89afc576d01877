# audit/services.py

"""
AUDIT SERVICE

record_audit_event() is called by domain services inside their own
transaction.atomic block. It never opens its own transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from audit.models import AuditEvent

logger = logging.getLogger(__name__)


def _client_ip(request) -> Optional[str]:
    if request is None:
        return None
    forwarded = (request.META.get("HTTP_X_FORWARDED_FOR") or "").strip()
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR") or None


def _user_agent(request) -> str:
    if request is None:
        return ""
    return (request.META.get("HTTP_USER_AGENT") or "")[:512]


def record_audit_event(
    *,
    action: str,
    target,
    actor=None,
    metadata: Optional[dict[str, Any]] = None,
    request=None,
) -> AuditEvent:
    """
    Append one AuditEvent.

    target may be a model instance (type/id derived) or a (type, id) tuple.
    """
    if isinstance(target, tuple):
        target_type, target_id = target
    else:
        target_type, target_id = target.__class__.__name__, target.pk

    if actor is not None and not getattr(actor, "is_authenticated", False):
        actor = None

    event = AuditEvent.objects.create(
        actor=actor,
        action=action,
        target_type=str(target_type),
        target_id=str(target_id),
        metadata=metadata or {},
        ip_address=_client_ip(request),
        user_agent=_user_agent(request),
    )

    logger.info(
        "Audit event recorded",
        extra={
            "action": action,
            "target_type": event.target_type,
            "target_id": event.target_id,
            "actor_id": str(actor.pk) if actor is not None else None,
        },
    )
    return event
