# applications/services/verification.py

"""
SELLER VERIFICATION SERVICE

Rules:
- One open (PENDING) or APPROVED application per (user, suite).
  A DENIED application does not block re-applying.
- Approving promotes a GUEST to SELLER. Other roles are left alone
  (an APPROVER/ADMIN who owns a suite keeps their role).
- is_verified_for_suite() is the gate used by listing create/edit.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from applications.models import ApplicationAttachment, SellerApplication
from applications.services.exceptions import (
    ApplicationNotFoundError,
    DuplicateApplicationError,
    InvalidDecisionError,
)
from applications.services import notifications
from audit.models import AuditEvent
from audit.services import record_audit_event
from permissions.roles import ROLE_GUEST, ROLE_SELLER
from suites.services.catalog import get_or_create_suite

logger = logging.getLogger(__name__)

DECISIONS = {SellerApplication.Status.APPROVED, SellerApplication.Status.DENIED}


# ============================================================
# VERIFICATION GATE
# ============================================================

def is_verified_for_suite(user, suite) -> bool:
    if not user or not getattr(user, "is_authenticated", False) or suite is None:
        return False

    return SellerApplication.objects.filter(
        user_id=user.pk,
        suite_id=getattr(suite, "pk", suite),
        status=SellerApplication.Status.APPROVED,
    ).exists()


def verified_suite_ids(user) -> set:
    if not user or not getattr(user, "is_authenticated", False):
        return set()

    return set(
        SellerApplication.objects.filter(
            user_id=user.pk,
            status=SellerApplication.Status.APPROVED,
        ).values_list("suite_id", flat=True)
    )


# ============================================================
# SUBMIT
# ============================================================

def submit_application(
    *,
    user,
    suite_area,
    suite_number,
    legal_name: str,
    message: str = "",
    attachment_ids=None,
    request=None,
) -> SellerApplication:
    with transaction.atomic():
        suite, _ = get_or_create_suite(area=suite_area, number=suite_number)

        existing = (
            SellerApplication.objects
            .select_for_update()
            .filter(user=user, suite=suite)
            .exclude(status=SellerApplication.Status.DENIED)
            .order_by("-created_at")
            .first()
        )
        if existing is not None:
            if existing.status == SellerApplication.Status.APPROVED:
                raise DuplicateApplicationError("You are already verified for this suite")
            raise DuplicateApplicationError("You already have a pending application for this suite")

        application = SellerApplication.objects.create(
            user=user,
            suite=suite,
            legal_name=legal_name.strip(),
            message=(message or "").strip(),
        )

        if attachment_ids:
            ApplicationAttachment.objects.filter(
                id__in=list(attachment_ids),
                uploaded_by=user,
                application__isnull=True,
            ).update(application=application)

        record_audit_event(
            action=AuditEvent.Action.SELLER_APPLICATION_CREATED,
            target=application,
            actor=user,
            request=request,
            metadata={"suite": suite.display_name},
        )

        transaction.on_commit(lambda: notifications.notify_application_submitted(application))

    logger.info(
        "Seller application submitted",
        extra={"application_id": str(application.pk), "suite": suite.display_name, "user_id": str(user.pk)},
    )
    return application


# ============================================================
# DECIDE
# ============================================================

def decide_application(
    *,
    application_id,
    status: str,
    reviewer,
    admin_note: str = "",
    denied_reason: str = "",
    request=None,
) -> SellerApplication:
    decision = (status or "").strip().upper()
    if decision not in DECISIONS:
        raise InvalidDecisionError("Invalid status. Must be APPROVED or DENIED")

    with transaction.atomic():
        application = (
            SellerApplication.objects
            .select_for_update()
            .select_related("user", "suite")
            .filter(pk=application_id)
            .first()
        )
        if application is None:
            raise ApplicationNotFoundError("Application not found")

        now = timezone.now()
        approved = decision == SellerApplication.Status.APPROVED

        application.status = decision
        application.admin_note = (admin_note or "").strip()
        application.denied_reason = "" if approved else (denied_reason or "").strip()
        application.reviewed_by = reviewer
        application.decided_at = now
        application.verified_at = now if approved else None
        application.save(
            update_fields=[
                "status",
                "admin_note",
                "denied_reason",
                "reviewed_by",
                "decided_at",
                "verified_at",
                "updated_at",
            ]
        )

        applicant = application.user
        if approved and applicant.role == ROLE_GUEST:
            applicant.role = ROLE_SELLER
            applicant.save(update_fields=["role", "updated_at"])
            record_audit_event(
                action=AuditEvent.Action.USER_ROLE_CHANGED,
                target=applicant,
                actor=reviewer,
                request=request,
                metadata={"from": ROLE_GUEST, "to": ROLE_SELLER, "application_id": str(application.pk)},
            )

        record_audit_event(
            action=(
                AuditEvent.Action.SELLER_APPLICATION_APPROVED
                if approved
                else AuditEvent.Action.SELLER_APPLICATION_DENIED
            ),
            target=application,
            actor=reviewer,
            request=request,
            metadata={"suite": application.suite.display_name, "denied_reason": application.denied_reason},
        )

        transaction.on_commit(lambda: notifications.notify_application_decided(application))

    logger.info(
        "Seller application decided",
        extra={"application_id": str(application.pk), "decision": decision, "reviewer_id": str(reviewer.pk)},
    )
    return application
