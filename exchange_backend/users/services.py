# users/services.py

"""
ACCOUNT SERVICE

- register_user(): every self-service account starts as GUEST
- set_user_role(): admin/ops role change (audited)
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from audit.models import AuditEvent
from audit.services import record_audit_event
from permissions.roles import ALL_ROLES, ROLE_ADMIN, ROLE_GUEST

logger = logging.getLogger(__name__)

User = get_user_model()


class AccountError(Exception):
    pass


class DuplicateEmailError(AccountError):
    pass


class InvalidRoleError(AccountError):
    pass


def register_user(*, email: str, password: str, name: str, phone: str = "", request=None):
    email = User.objects.normalize_email(email)

    with transaction.atomic():
        if User.objects.filter(email__iexact=email).exists():
            raise DuplicateEmailError("An account with this email already exists")

        user = User.objects.create_user(
            email=email,
            password=password,
            name=(name or "").strip(),
            phone=(phone or "").strip(),
            role=ROLE_GUEST,
        )

        record_audit_event(
            action=AuditEvent.Action.USER_REGISTERED,
            target=user,
            actor=user,
            request=request,
        )

    logger.info("User registered", extra={"user_id": str(user.pk)})
    return user


def set_user_role(*, user, role: str, actor=None, request=None):
    role = (role or "").strip().upper()
    if role not in ALL_ROLES:
        raise InvalidRoleError(f"Unknown role '{role}'. Expected one of: {', '.join(sorted(ALL_ROLES))}")

    previous = user.role
    if previous == role:
        return user

    with transaction.atomic():
        user.role = role
        # Admin console access follows the ADMIN role
        user.is_staff = role == ROLE_ADMIN or user.is_superuser
        user.save(update_fields=["role", "is_staff", "updated_at"])

        record_audit_event(
            action=AuditEvent.Action.USER_ROLE_CHANGED,
            target=user,
            actor=actor,
            request=request,
            metadata={"from": previous, "to": role},
        )

    logger.info("User role changed", extra={"user_id": str(user.pk), "from": previous, "to": role})
    return user
