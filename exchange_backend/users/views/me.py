# users/views/me.py

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from applications.services.verification import verified_suite_ids
from users.serializers import UserSerializer, UserSettingsSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(
        responses={200: UserSerializer},
        description="Current user, capabilities and verified suites",
    )
    def get(self, request):
        data = UserSerializer(request.user).data
        data["verified_suite_ids"] = sorted(str(pk) for pk in verified_suite_ids(request.user))
        return Response(data)


class UserSettingsView(APIView):
    """
    GET|PATCH /api/auth/settings/  (name, phone, show_in_directory)
    """

    permission_classes = [IsAuthenticated]
    serializer_class = UserSettingsSerializer

    @extend_schema(responses={200: UserSettingsSerializer})
    def get(self, request):
        return Response({"success": True, "user": UserSettingsSerializer(request.user).data})

    @extend_schema(request=UserSettingsSerializer, responses={200: UserSettingsSerializer})
    def patch(self, request):
        serializer = UserSettingsSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "user": serializer.data})
