# applications/services/uploads.py

"""
VERIFICATION DOCUMENT UPLOADS

Limits come from settings (UPLOAD_MAX_FILES, UPLOAD_MAX_FILE_SIZE_MB,
UPLOAD_ALLOWED_CONTENT_TYPES). The whole batch is validated before
anything is written.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction

from applications.models import ApplicationAttachment
from applications.services.exceptions import AttachmentError

logger = logging.getLogger(__name__)


def validate_upload_batch(files) -> None:
    files = list(files or [])
    if not files:
        raise AttachmentError("No files provided")

    max_files = settings.UPLOAD_MAX_FILES
    if len(files) > max_files:
        raise AttachmentError(f"Maximum {max_files} files allowed")

    max_mb = settings.UPLOAD_MAX_FILE_SIZE_MB
    allowed = set(settings.UPLOAD_ALLOWED_CONTENT_TYPES)

    for f in files:
        content_type = (getattr(f, "content_type", "") or "").lower()
        if content_type not in allowed:
            raise AttachmentError(
                f"File type {content_type or 'unknown'} not allowed. Allowed types: PDF, JPG, PNG, DOC, DOCX"
            )
        if f.size > max_mb * 1024 * 1024:
            raise AttachmentError(f"File {f.name} exceeds maximum size of {max_mb}MB")


@transaction.atomic
def store_attachments(*, user, files) -> list[ApplicationAttachment]:
    files = list(files or [])
    validate_upload_batch(files)

    stored = []
    for f in files:
        attachment = ApplicationAttachment(
            uploaded_by=user,
            original_name=(f.name or "")[:255],
            content_type=f.content_type.lower(),
            size=f.size,
        )
        attachment.file.save(f.name, f, save=False)
        attachment.save()
        stored.append(attachment)

    logger.info("Verification documents uploaded", extra={"user_id": str(user.pk), "count": len(stored)})
    return stored
