# applications/services/directory.py

"""
OWNERS DIRECTORY

Verified owners (at least one APPROVED application) who opted in with
show_in_directory. One entry per user with all of their suites.
Admins first, then by name.
"""

from __future__ import annotations

from applications.models import SellerApplication
from permissions.roles import ROLE_ADMIN


def list_directory_owners() -> list[dict]:
    approved = (
        SellerApplication.objects
        .filter(status=SellerApplication.Status.APPROVED, user__show_in_directory=True, user__is_active=True)
        .select_related("user", "suite")
        .order_by("suite__area", "suite__number")
    )

    owners: dict = {}
    for application in approved:
        user = application.user
        entry = owners.get(user.pk)
        if entry is None:
            entry = owners[user.pk] = {
                "id": user.pk,
                "name": user.name,
                "email": user.email,
                "phone": user.phone,
                "role": user.role,
                "suites": [],
            }

        suite = application.suite
        if not any(s["display_name"] == suite.display_name for s in entry["suites"]):
            entry["suites"].append(
                {"area": suite.area, "number": suite.number, "display_name": suite.display_name}
            )

    return sorted(
        owners.values(),
        key=lambda o: (o["role"] != ROLE_ADMIN, (o["name"] or "").lower()),
    )
