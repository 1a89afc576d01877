# suites/serializers.py

from rest_framework import serializers

from suites.models import Suite


class SuiteSerializer(serializers.ModelSerializer):
    map_key = serializers.CharField(read_only=True)

    class Meta:
        model = Suite
        fields = ["id", "area", "number", "display_name", "capacity", "is_active", "map_key"]
        read_only_fields = fields
