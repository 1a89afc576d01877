# users/serializers.py

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from permissions.roles import capabilities_for

User = get_user_model()


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, trim_whitespace=True)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
        error_messages={"blank": "Password must be at least 8 characters long"},
    )
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_email(self, value):
        return User.objects.normalize_email(value)


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    capabilities = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "role",
            "show_in_directory",
            "capabilities",
        ]
        read_only_fields = fields

    def get_capabilities(self, obj):
        return sorted(capabilities_for(obj))


# ---------------- SETTINGS ----------------
class UserSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "name", "phone", "show_in_directory", "role"]
        read_only_fields = ["id", "email", "role"]

    def validate_name(self, value):
        return (value or "").strip()

    def validate_phone(self, value):
        return (value or "").strip()


# ---------------- OWNERS DIRECTORY ----------------
class OwnerSuiteSerializer(serializers.Serializer):
    area = serializers.CharField()
    number = serializers.IntegerField()
    display_name = serializers.CharField()


class OwnerSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()
    role = serializers.CharField()
    suites = OwnerSuiteSerializer(many=True)
