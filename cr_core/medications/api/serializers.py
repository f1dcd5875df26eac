# cr_core/medications/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.medications.models import Medication


class MedicationCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    dosage = serializers.CharField(max_length=128)
    frequency = serializers.CharField(max_length=128)
    duration = serializers.CharField(max_length=128)
    instructions = serializers.CharField(required=False, allow_blank=True)
    drug_form = serializers.CharField(max_length=64, required=False, allow_blank=True)
    quantity = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    patient_id = serializers.UUIDField()
    provider_id = serializers.UUIDField()
    encounter_id = serializers.UUIDField(required=False, allow_null=True)


class MedicationUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    dosage = serializers.CharField(max_length=128, required=False)
    frequency = serializers.CharField(max_length=128, required=False)
    duration = serializers.CharField(max_length=128, required=False)
    instructions = serializers.CharField(required=False, allow_blank=True)
    drug_form = serializers.CharField(max_length=64, required=False, allow_blank=True)
    quantity = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class MedicationSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    provider_id = serializers.UUIDField(read_only=True)
    encounter_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Medication
        fields = [
            "id",
            "tracking_id",
            "patient_id",
            "provider_id",
            "encounter_id",
            "name",
            "dosage",
            "frequency",
            "duration",
            "instructions",
            "drug_form",
            "quantity",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MedicationMetricsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    patients = serializers.IntegerField()
