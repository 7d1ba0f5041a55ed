"""
Accounts app serializers.

Contains all Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here — all domain
rules are delegated to ``services.py``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password as run_password_validators
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import Role

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class RegisterRequestSerializer(serializers.Serializer):
    """
    Validates new-user registration data.

    Required fields: name, email, password.  ``role`` is optional and
    must be one of the four known roles.

    The response after a successful registration is handled by
    ``UserSerializer``.
    """

    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        trim_whitespace=False,
    )
    role = serializers.ChoiceField(
        choices=Role.choices,
        required=False,
        help_text="Defaults to 'user'.",
    )

    def validate_email(self, value: str) -> str:
        """Reject an e-mail that is already registered (case-insensitive)."""
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    def validate_password(self, value: str) -> str:
        """Apply ``AUTH_PASSWORD_VALIDATORS``."""
        try:
            run_password_validators(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value


class LoginRequestSerializer(serializers.Serializer):
    """E-mail + password credentials."""

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        trim_whitespace=False,
    )


# ═══════════════════════════════════════════════════════════════════
#  User Serializers
# ═══════════════════════════════════════════════════════════════════


class UserSerializer(serializers.ModelSerializer):
    """
    Public user representation.  The password hash is never exposed.
    """

    user_id = serializers.IntegerField(source="pk", read_only=True)

    class Meta:
        model = User
        fields = ["user_id", "name", "email", "role", "date_joined"]
        read_only_fields = fields


class LoginResponseSerializer(serializers.Serializer):
    """Bearer token plus the user it was issued for."""

    token = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)
    user = UserSerializer(read_only=True)


class ChangeRoleSerializer(serializers.Serializer):
    """
    Accepts the new ``role`` for ``PUT /users/{id}/role/``.

    Only presence is checked here; the service validates the value
    against ``Role`` so an unknown role yields ``"Invalid role"``.
    """

    role = serializers.CharField(
        help_text="One of: " + ", ".join(Role.values) + ".",
    )
