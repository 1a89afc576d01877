# applications/serializers/application.py

from rest_framework import serializers

from applications.models import ApplicationAttachment, SellerApplication
from suites.models import Suite


class ApplicationAttachmentSerializer(serializers.ModelSerializer):
    url = serializers.SerializerMethodField()

    class Meta:
        model = ApplicationAttachment
        fields = ["id", "url", "original_name", "content_type", "size", "created_at"]
        read_only_fields = fields

    def get_url(self, obj):
        return obj.file.url if obj.file else None


class ApplicantSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    phone = serializers.CharField(read_only=True)


class ApplicationSuiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Suite
        fields = ["id", "area", "number", "display_name"]
        read_only_fields = fields


class SellerApplicationSerializer(serializers.ModelSerializer):
    """Read shape for applicants and reviewers."""

    user = ApplicantSerializer(read_only=True)
    suite = ApplicationSuiteSerializer(read_only=True)
    attachments = ApplicationAttachmentSerializer(many=True, read_only=True)
    reviewed_by_email = serializers.EmailField(source="reviewed_by.email", read_only=True, default=None)

    class Meta:
        model = SellerApplication
        fields = [
            "id",
            "user",
            "suite",
            "legal_name",
            "message",
            "status",
            "admin_note",
            "denied_reason",
            "reviewed_by_email",
            "decided_at",
            "verified_at",
            "attachments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SellerApplicationSubmitSerializer(serializers.Serializer):
    """
    Command serializer for POST /api/applications/.
    Suite is identified by area + number (found or created by the service).
    """

    suite_area = serializers.ChoiceField(choices=Suite.Area.choices)
    suite_number = serializers.IntegerField(min_value=1)
    legal_name = serializers.CharField(min_length=2, max_length=255, trim_whitespace=True)
    message = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    attachments = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
    )


class ApplicationDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[SellerApplication.Status.APPROVED, SellerApplication.Status.DENIED],
    )
    admin_note = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    denied_reason = serializers.CharField(required=False, allow_blank=True, max_length=2000)
