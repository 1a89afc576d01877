# forum/serializers.py

from rest_framework import serializers

from forum.models import Discussion, DiscussionReply


class ForumAuthorSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    role = serializers.CharField(read_only=True)


class DiscussionReplySerializer(serializers.ModelSerializer):
    author = ForumAuthorSerializer(read_only=True)

    class Meta:
        model = DiscussionReply
        fields = ["id", "author", "content", "created_at", "updated_at"]
        read_only_fields = ["id", "author", "created_at", "updated_at"]

    def validate_content(self, value):
        if not 10 <= len(value or "") <= 2000:
            raise serializers.ValidationError("Reply must be between 10 and 2000 characters")
        return value


class DiscussionSerializer(serializers.ModelSerializer):
    author = ForumAuthorSerializer(read_only=True)
    category = serializers.CharField(required=False, allow_blank=True, max_length=64)

    class Meta:
        model = Discussion
        fields = [
            "id",
            "author",
            "title",
            "content",
            "category",
            "is_pinned",
            "is_locked",
            "view_count",
            "reply_count",
            "last_activity_at",
            "created_at",
        ]
        read_only_fields = [
            "id",
            "author",
            "is_pinned",
            "is_locked",
            "view_count",
            "reply_count",
            "last_activity_at",
            "created_at",
        ]

    def validate_title(self, value):
        if not 5 <= len(value or "") <= 200:
            raise serializers.ValidationError("Title must be between 5 and 200 characters")
        return value

    def validate_content(self, value):
        if not 20 <= len(value or "") <= 5000:
            raise serializers.ValidationError("Content must be between 20 and 5000 characters")
        return value


class DiscussionDetailSerializer(DiscussionSerializer):
    replies = DiscussionReplySerializer(many=True, read_only=True)

    class Meta(DiscussionSerializer.Meta):
        fields = DiscussionSerializer.Meta.fields + ["replies"]


class ModerationSerializer(serializers.Serializer):
    is_pinned = serializers.BooleanField(required=False, allow_null=True, default=None)
    is_locked = serializers.BooleanField(required=False, allow_null=True, default=None)
