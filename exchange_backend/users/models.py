"""
PATH: users/models.py

CUSTOM USER MODEL

Identity rules:
- Email is the login identifier (case-insensitive, stored lower-cased).
- Every new registration starts as GUEST.
- Role is promoted to SELLER by an approved seller-verification application
  (applications.services.verification) or changed by an admin.
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_APPROVER, ROLE_GUEST, ROLE_SELLER


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def normalize_email(self, email):
        return super().normalize_email((email or "").strip()).lower()

    def create_user(self, email=None, password=None, **extra_fields):
        """
        create_user(email="a@b.com", password="x", name="Jane", role="SELLER")

        Rules:
        - email is required
        - role defaults to GUEST
        """
        email = self.normalize_email(email)
        if not email:
            raise ValueError("Users must have an email address")

        extra_fields.setdefault("role", ROLE_GUEST)
        extra_fields.setdefault("is_active", True)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_CHOICES = [
        (ROLE_GUEST, "Guest"),
        (ROLE_SELLER, "Seller"),
        (ROLE_APPROVER, "Approver"),
        (ROLE_ADMIN, "Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=32, blank=True)

    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default=ROLE_GUEST, db_index=True)

    # Owners directory opt-in
    show_in_directory = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email)
        self.name = (self.name or "").strip()

        if self.role not in {choice for choice, _ in self.ROLE_CHOICES}:
            raise ValidationError({"role": f"Unknown role '{self.role}'"})

    @property
    def display_name(self) -> str:
        return self.name or self.email.split("@")[0]

    def __str__(self):
        return f"{self.email} ({self.role})"
