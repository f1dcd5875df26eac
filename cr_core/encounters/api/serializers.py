# cr_core/encounters/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.encounters.models import Encounter, EncounterType


# ------------------------------------------------------------
# SOAP sub-objects (stored as JSON on the encounter)
# ------------------------------------------------------------
class SubjectiveSerializer(serializers.Serializer):
    chief_complaint = serializers.CharField(required=False, allow_blank=True)
    history_of_present_illness = serializers.CharField(required=False, allow_blank=True)
    review_of_systems = serializers.CharField(required=False, allow_blank=True)
    social_history = serializers.CharField(required=False, allow_blank=True)
    family_history = serializers.CharField(required=False, allow_blank=True)


class VitalSignsSerializer(serializers.Serializer):
    blood_pressure = serializers.CharField(required=False, allow_blank=True, max_length=16)
    heart_rate = serializers.FloatField(required=False)
    temperature = serializers.FloatField(required=False)
    respiratory_rate = serializers.FloatField(required=False)
    oxygen_saturation = serializers.FloatField(required=False, min_value=0, max_value=100)
    height = serializers.FloatField(required=False, min_value=0)
    weight = serializers.FloatField(required=False, min_value=0)
    bmi = serializers.FloatField(required=False, min_value=0)


class ObjectiveSerializer(serializers.Serializer):
    vital_signs = VitalSignsSerializer(required=False)
    physical_examination = serializers.CharField(required=False, allow_blank=True)
    laboratory_results = serializers.CharField(required=False, allow_blank=True)
    diagnostic_tests = serializers.CharField(required=False, allow_blank=True)


class AssessmentSerializer(serializers.Serializer):
    primary_diagnosis = serializers.CharField(required=False, allow_blank=True)
    secondary_diagnosis = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    differential_diagnosis = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    clinical_impression = serializers.CharField(required=False, allow_blank=True)


# ------------------------------------------------------------
# Request contracts
# ------------------------------------------------------------
class EncounterCreateSerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()
    provider_id = serializers.UUIDField()
    branch_id = serializers.UUIDField(required=False, allow_null=True)
    encounter_type = serializers.ChoiceField(choices=EncounterType.choices)
    scheduled_date = serializers.DateTimeField()
    symptoms = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    subjective = SubjectiveSerializer(required=False)
    objective = ObjectiveSerializer(required=False)
    assessment = AssessmentSerializer(required=False)

    clinical_notes = serializers.CharField(required=False, allow_blank=True)
    custom_fields = serializers.DictField(required=False)
    follow_up_encounter_id = serializers.UUIDField(required=False, allow_null=True)


class EncounterUpdateSerializer(serializers.Serializer):
    scheduled_date = serializers.DateTimeField(required=False)
    symptoms = serializers.ListField(child=serializers.CharField(), required=False)

    subjective = SubjectiveSerializer(required=False)
    objective = ObjectiveSerializer(required=False)
    assessment = AssessmentSerializer(required=False)

    clinical_notes = serializers.CharField(required=False, allow_blank=True)
    custom_fields = serializers.DictField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class CancelEncounterSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True)


class RescheduleEncounterSerializer(serializers.Serializer):
    date = serializers.DateTimeField()
    reason = serializers.CharField(required=False, allow_blank=True)


class EncounterMetricsQuerySerializer(serializers.Serializer):
    patient_id = serializers.UUIDField(required=False)
    provider_id = serializers.UUIDField(required=False)
    branch_id = serializers.UUIDField(required=False)


# ------------------------------------------------------------
# Response shapes
# ------------------------------------------------------------
class EncounterSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    provider_id = serializers.UUIDField(read_only=True)
    branch_id = serializers.UUIDField(read_only=True, allow_null=True)
    follow_up_encounter_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Encounter
        fields = [
            "id",
            "patient_id",
            "provider_id",
            "branch_id",
            "encounter_type",
            "status",
            "scheduled_date",
            "actual_start_time",
            "actual_end_time",
            "symptoms",
            "subjective",
            "objective",
            "assessment",
            "clinical_notes",
            "custom_fields",
            "follow_up_encounter_id",
            "cancellation_reason",
            "reschedule_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class EncounterMetricsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    scheduled = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    completed = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    consultation = serializers.IntegerField()
    follow_ups = serializers.IntegerField()
