# messaging/serializers.py

from rest_framework import serializers

from messaging.models import Message


class MessageUserSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class MessageListingSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    event_title = serializers.CharField(read_only=True)
    slug = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    suite = serializers.CharField(source="suite.display_name", read_only=True)


class MessageSerializer(serializers.ModelSerializer):
    from_user = MessageUserSerializer(read_only=True)
    to_user = MessageUserSerializer(read_only=True)
    listing = MessageListingSerializer(read_only=True)

    class Meta:
        model = Message
        fields = ["id", "listing", "from_user", "to_user", "body", "is_read", "read_at", "created_at"]
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    listing_id = serializers.CharField()
    # Length/blank rules are enforced by the service so errors share one shape
    message = serializers.CharField(allow_blank=True, trim_whitespace=False)


class MarkReadSerializer(serializers.Serializer):
    message_id = serializers.CharField(required=False)
    mark_all = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if not attrs.get("message_id") and not attrs.get("mark_all"):
            raise serializers.ValidationError("Either message_id or mark_all must be provided")
        return attrs
