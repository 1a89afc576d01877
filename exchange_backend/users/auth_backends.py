"""
PATH: users/auth_backends.py

AUTH BACKEND: Email login

Rules:
- The identifier is the email address, matched case-insensitively.
- Django convention passes the identifier as "username"; DRF/SimpleJWT
  flows pass it as "email" (USERNAME_FIELD). Both are accepted.
- Inactive users never authenticate.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

User = get_user_model()


class EmailBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = (username or kwargs.get("email") or "").strip()
        if not identifier or password is None:
            return None

        try:
            user = User.objects.get(email__iexact=identifier)
        except User.DoesNotExist:
            # Run the hasher anyway so response time doesn't leak account existence
            User().set_password(password)
            return None

        if not user.is_active:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
