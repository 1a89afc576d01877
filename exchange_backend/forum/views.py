# forum/views.py

"""
OWNERS FORUM

- GET   /api/discussions/?category=&limit=
- POST  /api/discussions/                      (forum.post)
- GET   /api/discussions/<id>/                 with replies; counts a view
- POST  /api/discussions/<id>/replies/         (forum.post; not when locked)
- PATCH /api/discussions/<id>/moderate/        pin / lock (forum.moderate)
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from forum.models import Discussion
from forum.serializers import (
    DiscussionDetailSerializer,
    DiscussionReplySerializer,
    DiscussionSerializer,
    ModerationSerializer,
)
from forum.services import discussions as forum_service
from forum.services.exceptions import (
    DiscussionLockedError,
    DiscussionNotFoundError,
    ForumError,
    ForumPermissionError,
)
from permissions.roles import CAP_FORUM_MODERATE, HasCapability

ERROR_STATUS = (
    (DiscussionNotFoundError, "DISCUSSION_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    (DiscussionLockedError, "DISCUSSION_LOCKED", status.HTTP_403_FORBIDDEN),
    (ForumPermissionError, "FORBIDDEN", status.HTTP_403_FORBIDDEN),
)


def error_response(exc: ForumError):
    for error_class, code, http_status in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        code, http_status = "FORUM_ERROR", status.HTTP_400_BAD_REQUEST

    return Response({"error": {"code": code, "message": str(exc)}}, status=http_status)


class DiscussionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = DiscussionSerializer
    pagination_class = None

    required_capability = None

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        if self.action == "moderate":
            self.required_capability = CAP_FORUM_MODERATE
            return [IsAuthenticated(), HasCapability()]
        return [IsAuthenticated()]

    def get_queryset(self):
        qs = Discussion.objects.select_related("author").order_by("-is_pinned", "-last_activity_at")
        if self.action == "retrieve":
            return qs.prefetch_related("replies__author")
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return DiscussionDetailSerializer
        return DiscussionSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(name="category", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = self.get_queryset()

        category = (request.query_params.get("category") or "").strip()
        if category and category != "All":
            qs = qs.filter(category=category)

        limit = (request.query_params.get("limit") or "").strip()
        if limit.isdigit() and int(limit) > 0:
            qs = qs[: int(limit)]

        return Response({"success": True, "discussions": DiscussionSerializer(qs, many=True).data})

    def retrieve(self, request, pk=None):
        discussion = self.get_object()
        forum_service.record_view(discussion)
        discussion.view_count += 1
        return Response({"success": True, "discussion": DiscussionDetailSerializer(discussion).data})

    def create(self, request):
        serializer = DiscussionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            discussion = forum_service.start_discussion(
                author=request.user,
                title=serializer.validated_data["title"],
                content=serializer.validated_data["content"],
                category=serializer.validated_data.get("category", ""),
            )
        except ForumError as exc:
            return error_response(exc)

        return Response(
            {"success": True, "discussion": DiscussionSerializer(discussion).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=DiscussionReplySerializer, responses={201: DiscussionReplySerializer})
    @action(detail=True, methods=["post"], url_path="replies")
    def replies(self, request, pk=None):
        serializer = DiscussionReplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            reply = forum_service.add_reply(
                author=request.user,
                discussion_id=pk,
                content=serializer.validated_data["content"],
            )
        except ForumError as exc:
            return error_response(exc)

        return Response(
            {"success": True, "reply": DiscussionReplySerializer(reply).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=ModerationSerializer, responses={200: DiscussionSerializer})
    @action(detail=True, methods=["patch"], url_path="moderate")
    def moderate(self, request, pk=None):
        serializer = ModerationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            discussion = forum_service.moderate(discussion_id=pk, **serializer.validated_data)
        except ForumError as exc:
            return error_response(exc)

        return Response({"success": True, "discussion": DiscussionSerializer(discussion).data})
