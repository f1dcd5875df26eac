# cr_core/referrals/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.referrals.models import Referral


class ReferralCreateSerializer(serializers.Serializer):
    reason = serializers.CharField()
    note = serializers.CharField(required=False, allow_blank=True)
    urgency = serializers.CharField(max_length=32, required=False, allow_blank=True)
    facility = serializers.CharField(max_length=255, required=False, allow_blank=True)

    patient_id = serializers.UUIDField()
    provider_id = serializers.UUIDField()
    encounter_id = serializers.UUIDField(required=False, allow_null=True)


class ReferralUpdateSerializer(serializers.Serializer):
    # status moves only through the transition endpoints
    reason = serializers.CharField(required=False)
    note = serializers.CharField(required=False, allow_blank=True)
    urgency = serializers.CharField(max_length=32, required=False, allow_blank=True)
    facility = serializers.CharField(max_length=255, required=False, allow_blank=True)


class ReferralSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    provider_id = serializers.UUIDField(read_only=True)
    encounter_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Referral
        fields = [
            "id",
            "tracking_id",
            "patient_id",
            "provider_id",
            "encounter_id",
            "reason",
            "note",
            "urgency",
            "facility",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReferralMetricsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    approved = serializers.IntegerField()
    ongoing = serializers.IntegerField()
    rejected = serializers.IntegerField()
    completed = serializers.IntegerField()
