"""
Accounts app models.

Defines the closed ``Role`` enumeration and a custom ``User`` model that
extends Django's ``AbstractUser`` with e-mail login and a display name.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class Role(models.TextChoices):
    """
    The four roles a principal may hold.

    Unlike case statuses (an open string set, see ``cases.models``),
    roles are a **closed** enumeration: they drive authorization, so any
    value outside this list is rejected at the boundary.
    """

    ADMIN = "admin", "Administrator"
    USER = "user", "User"
    POLICE = "police", "Police"
    VOLUNTEER = "volunteer", "Volunteer"


class UserManager(BaseUserManager):
    """Manager for the e-mail–keyed ``User`` (no ``username`` column)."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email address must be set.")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", Role.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", Role.ADMIN)
        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    A registered principal.

    Login uses ``email`` + password.  Each user holds exactly **one**
    role; new users register as ``user`` unless a valid role is
    supplied, and only an administrator may change it afterwards.
    """

    username = None
    first_name = None
    last_name = None

    name = models.CharField(
        max_length=255,
        verbose_name="Name",
    )
    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
        verbose_name="Role",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    class Meta:
        db_table = "users"
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} <{self.email}> - {self.role}"

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
