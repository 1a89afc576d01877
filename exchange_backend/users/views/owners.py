# users/views/owners.py

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from applications.services.directory import list_directory_owners
from users.serializers import OwnerSerializer


class OwnersDirectoryView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OwnerSerializer

    @extend_schema(responses={200: OwnerSerializer(many=True)}, description="Opted-in verified suite owners")
    def get(self, request):
        owners = OwnerSerializer(list_directory_owners(), many=True).data
        return Response({"success": True, "owners": owners})
