# cr_core/lab_tests/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.lab_tests.models import LabTest, LabTestStatus


class LabTestCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    note = serializers.CharField(required=False, allow_blank=True)
    urgency = serializers.CharField(max_length=32, required=False, allow_blank=True)
    tat = serializers.CharField(max_length=64, required=False, allow_blank=True)
    facility = serializers.CharField(max_length=255, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=LabTestStatus.choices, required=False, default=LabTestStatus.PENDING)

    patient_id = serializers.UUIDField()
    provider_id = serializers.UUIDField()
    encounter_id = serializers.UUIDField(required=False, allow_null=True)


class LabTestUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    note = serializers.CharField(required=False, allow_blank=True)
    urgency = serializers.CharField(max_length=32, required=False, allow_blank=True)
    tat = serializers.CharField(max_length=64, required=False, allow_blank=True)
    facility = serializers.CharField(max_length=255, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=LabTestStatus.choices, required=False)


class LabTestSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    provider_id = serializers.UUIDField(read_only=True)
    encounter_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = LabTest
        fields = [
            "id",
            "tracking_id",
            "patient_id",
            "provider_id",
            "encounter_id",
            "name",
            "note",
            "urgency",
            "tat",
            "facility",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class LabTestMetricsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    approved = serializers.IntegerField()
    rejected = serializers.IntegerField()
