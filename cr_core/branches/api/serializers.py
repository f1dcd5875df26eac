from __future__ import annotations

from rest_framework import serializers

from cr_core.branches.models import Branch


class BranchCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    whatsapp = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    hotline = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    available = serializers.BooleanField(required=False, default=True)


class BranchUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    whatsapp = serializers.CharField(max_length=32, required=False, allow_blank=True)
    hotline = serializers.CharField(max_length=32, required=False, allow_blank=True)
    available = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class BranchSerializer(serializers.ModelSerializer):
    provider_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Branch
        fields = [
            "id",
            "provider_id",
            "name",
            "address",
            "phone_number",
            "email",
            "whatsapp",
            "hotline",
            "available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BranchMetricsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    active = serializers.IntegerField()
    inactive = serializers.IntegerField()
