# applications/services/notifications.py

"""
Email notifications for seller verification.
Sent after commit; a mail failure is logged and never undoes a decision.
"""

from __future__ import annotations

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _send(*, subject: str, body: str, recipients: list[str]) -> bool:
    recipients = [r for r in recipients if r]
    if not recipients:
        return False

    try:
        send_mail(
            subject=subject,
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=recipients,
            fail_silently=False,
        )
    except (SMTPException, OSError):
        logger.exception("Failed to send email", extra={"subject": subject, "recipients": recipients})
        return False

    return True


def notify_application_submitted(application) -> bool:
    review_to = getattr(settings, "APPLICATION_REVIEW_EMAIL", "")
    return _send(
        subject=f"New suite verification: {application.suite.display_name}",
        body=(
            f"{application.legal_name} ({application.user.email}) applied to be verified "
            f"for suite {application.suite.display_name}.\n\n"
            f"Review: {settings.APP_URL}/approver/applications"
        ),
        recipients=[review_to],
    )


def notify_application_decided(application) -> bool:
    suite_name = application.suite.display_name
    if application.is_approved:
        subject = f"Suite {suite_name} verified"
        body = (
            f"Your ownership of suite {suite_name} has been verified. "
            f"You can now list tickets: {settings.APP_URL}/sell"
        )
    else:
        subject = f"Suite {suite_name} verification denied"
        body = f"Your application for suite {suite_name} was not approved."
        if application.denied_reason:
            body += f"\n\nReason: {application.denied_reason}"

    return _send(subject=subject, body=body, recipients=[application.user.email])
