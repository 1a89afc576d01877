# applications/views/application.py

"""
SELLER VERIFICATION ENDPOINTS

- POST   /api/applications/                  submit (any signed-in user)
- GET    /api/applications/?status=PENDING   review queue (approver/admin)
- GET    /api/applications/mine/             own applications
- GET    /api/applications/pending-count/    badge count (approver/admin)
- GET    /api/applications/<id>/             applicant or reviewer
- PATCH  /api/applications/<id>/decide/      approve / deny (approver/admin)
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from applications.models import SellerApplication
from applications.serializers import (
    ApplicationDecisionSerializer,
    SellerApplicationSerializer,
    SellerApplicationSubmitSerializer,
)
from applications.services.exceptions import (
    ApplicationNotFoundError,
    DuplicateApplicationError,
    InvalidDecisionError,
)
from applications.services.verification import decide_application, submit_application
from permissions.roles import CAP_APPLICATIONS_REVIEW, HasCapability, user_has_capability


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


class SellerApplicationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = SellerApplicationSerializer
    permission_classes = [IsAuthenticated]

    required_capability = None

    REVIEWER_ACTIONS = {"list", "pending_count", "decide"}

    def get_permissions(self):
        if self.action in self.REVIEWER_ACTIONS:
            self.required_capability = CAP_APPLICATIONS_REVIEW
            return [IsAuthenticated(), HasCapability()]
        return [IsAuthenticated()]

    def get_queryset(self):
        qs = (
            SellerApplication.objects
            .select_related("user", "suite", "reviewed_by")
            .prefetch_related("attachments")
            .order_by("-created_at")
        )

        if self.action == "list":
            status_filter = (self.request.query_params.get("status") or "").strip().upper()
            if status_filter:
                qs = qs.filter(status=status_filter)
            return qs

        if self.action == "mine":
            return qs.filter(user=self.request.user)

        if self.action == "retrieve" and not user_has_capability(self.request.user, CAP_APPLICATIONS_REVIEW):
            # Applicants only see their own
            return qs.filter(user=self.request.user)

        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=SellerApplicationSubmitSerializer, responses={201: SellerApplicationSerializer})
    def create(self, request):
        serializer = SellerApplicationSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            application = submit_application(
                user=request.user,
                suite_area=data["suite_area"],
                suite_number=data["suite_number"],
                legal_name=data["legal_name"],
                message=data.get("message", ""),
                attachment_ids=data.get("attachments"),
                request=request,
            )
        except DuplicateApplicationError as exc:
            return error_response(
                code="DUPLICATE_APPLICATION",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except DjangoValidationError as exc:
            return error_response(
                code="INVALID_SUITE",
                message="; ".join(exc.messages),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(
            {"success": True, "application": SellerApplicationSerializer(application).data},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        serializer = SellerApplicationSerializer(self.get_queryset(), many=True)
        return Response({"success": True, "applications": serializer.data})

    @action(detail=False, methods=["get"], url_path="pending-count")
    def pending_count(self, request):
        count = SellerApplication.objects.filter(status=SellerApplication.Status.PENDING).count()
        return Response({"count": count})

    @extend_schema(request=ApplicationDecisionSerializer, responses={200: SellerApplicationSerializer})
    @action(detail=True, methods=["patch"], url_path="decide")
    def decide(self, request, pk=None):
        serializer = ApplicationDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            application = decide_application(
                application_id=pk,
                status=data["status"],
                reviewer=request.user,
                admin_note=data.get("admin_note", ""),
                denied_reason=data.get("denied_reason", ""),
                request=request,
            )
        except ApplicationNotFoundError as exc:
            return error_response(
                code="APPLICATION_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )
        except InvalidDecisionError as exc:
            return error_response(
                code="INVALID_DECISION",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response({"success": True, "application": SellerApplicationSerializer(application).data})
