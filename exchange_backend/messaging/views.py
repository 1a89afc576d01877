# messaging/views.py

"""
MESSAGES

- GET   /api/messages/?type=all|inbox|sent
- POST  /api/messages/send/         {listing_id, message}
- PATCH /api/messages/mark-read/    {message_id} | {mark_all: true}
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from messaging.serializers import MarkReadSerializer, MessageSerializer, SendMessageSerializer
from messaging.services.exceptions import (
    InvalidMessageError,
    MessageListingNotFoundError,
    MessageNotFoundError,
    MessagePermissionError,
    MessagesNotAllowedError,
    MessagingError,
    SelfMessageError,
)
from messaging.services.messages import (
    BOX_ALL,
    BOXES,
    mark_all_read,
    mark_read,
    messages_for,
    send_message,
    unread_count,
)

ERROR_STATUS = (
    (MessageListingNotFoundError, "LISTING_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    (MessageNotFoundError, "MESSAGE_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    (MessagesNotAllowedError, "MESSAGES_DISABLED", status.HTTP_403_FORBIDDEN),
    (MessagePermissionError, "FORBIDDEN", status.HTTP_403_FORBIDDEN),
    (SelfMessageError, "SELF_MESSAGE", status.HTTP_400_BAD_REQUEST),
    (InvalidMessageError, "INVALID_MESSAGE", status.HTTP_400_BAD_REQUEST),
)


def error_response(exc: MessagingError):
    for error_class, code, http_status in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        code, http_status = "MESSAGING_ERROR", status.HTTP_400_BAD_REQUEST

    return Response({"error": {"code": code, "message": str(exc)}}, status=http_status)


class MessageListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[OpenApiParameter(name="type", type=str, location=OpenApiParameter.QUERY, required=False)],
        responses={200: MessageSerializer(many=True)},
    )
    def get(self, request):
        box = (request.query_params.get("type") or BOX_ALL).strip().lower()
        if box not in BOXES:
            box = BOX_ALL

        messages = messages_for(request.user, box)
        return Response(
            {
                "success": True,
                "messages": MessageSerializer(messages, many=True).data,
                "unread_count": unread_count(request.user),
            }
        )


class SendMessageView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "message_send"

    @extend_schema(request=SendMessageSerializer, responses={201: MessageSerializer})
    def post(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            message = send_message(
                sender=request.user,
                listing_id=serializer.validated_data["listing_id"],
                body=serializer.validated_data["message"],
            )
        except MessagingError as exc:
            return error_response(exc)

        return Response(
            {"success": True, "message": "Message sent successfully", "data": MessageSerializer(message).data},
            status=status.HTTP_201_CREATED,
        )


class MarkReadView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=MarkReadSerializer)
    def patch(self, request):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data.get("mark_all"):
            updated = mark_all_read(user=request.user)
            return Response({"success": True, "message": "All messages marked as read", "updated": updated})

        try:
            mark_read(user=request.user, message_id=serializer.validated_data["message_id"])
        except MessagingError as exc:
            return error_response(exc)

        return Response({"success": True, "message": "Message marked as read"})
