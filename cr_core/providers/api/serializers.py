# cr_core/providers/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.providers.models import Provider


class ProviderUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH /providers/me). Creates the profile on first use.
    """
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    image = serializers.URLField(max_length=500, required=False, allow_blank=True)
    type = serializers.CharField(max_length=64, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    whatsapp = serializers.CharField(max_length=32, required=False, allow_blank=True)
    hotline = serializers.CharField(max_length=32, required=False, allow_blank=True)
    available = serializers.BooleanField(required=False)


class ProviderSerializer(serializers.ModelSerializer):
    account_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Provider
        fields = [
            "id",
            "account_id",
            "name",
            "image",
            "type",
            "phone_number",
            "address",
            "whatsapp",
            "hotline",
            "available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProviderMetricsSerializer(serializers.Serializer):
    provider_id = serializers.UUIDField()
    available = serializers.BooleanField()
    name_present = serializers.BooleanField()
    contact_complete = serializers.BooleanField()
    type_defined = serializers.BooleanField()
    profile_complete_percent = serializers.IntegerField()
    days_active = serializers.IntegerField()
    last_updated_days_ago = serializers.IntegerField()


class ProvidersMetricsSerializer(serializers.Serializer):
    totalProviders = serializers.IntegerField()
    availableProviders = serializers.IntegerField()
    providersWithName = serializers.IntegerField()
    providersWithContact = serializers.IntegerField()
    availablePercent = serializers.FloatField()
    profileCompletePercent = serializers.FloatField()
