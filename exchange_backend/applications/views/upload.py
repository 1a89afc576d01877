# applications/views/upload.py

from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from applications.serializers import ApplicationAttachmentSerializer
from applications.services.exceptions import AttachmentError
from applications.services.uploads import store_attachments
from applications.views.application import error_response


class ApplicationUploadView(APIView):
    """
    POST /api/applications/uploads/  (multipart, field "files", repeatable)

    Returns attachment ids to pass as `attachments` when submitting.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        files = request.FILES.getlist("files")

        try:
            stored = store_attachments(user=request.user, files=files)
        except AttachmentError as exc:
            return error_response(
                code="INVALID_UPLOAD",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        data = ApplicationAttachmentSerializer(stored, many=True).data
        return Response(
            {
                "success": True,
                "attachments": data,
                "urls": [item["url"] for item in data],
                "message": f"{len(stored)} file(s) uploaded successfully",
            },
            status=status.HTTP_201_CREATED,
        )
