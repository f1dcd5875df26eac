# cr_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.patients.models import Patient


class PatientUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH /patients/me).
    """
    first_name = serializers.CharField(max_length=128, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=128, required=False, allow_blank=True)
    dob = serializers.DateField(required=False, allow_null=True)
    gender = serializers.CharField(max_length=32, required=False, allow_blank=True)
    blood_group = serializers.CharField(max_length=8, required=False, allow_blank=True)
    genotype = serializers.CharField(max_length=8, required=False, allow_blank=True)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    image = serializers.URLField(max_length=500, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    height = serializers.FloatField(required=False, allow_null=True, min_value=0)
    weight = serializers.FloatField(required=False, allow_null=True, min_value=0)
    bmi = serializers.FloatField(required=False, allow_null=True, min_value=0)
    hmo_id = serializers.CharField(max_length=64, required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class PatientSerializer(serializers.ModelSerializer):
    account_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Patient
        fields = [
            "id",
            "account_id",
            "first_name",
            "last_name",
            "dob",
            "gender",
            "blood_group",
            "genotype",
            "address",
            "image",
            "phone_number",
            "height",
            "weight",
            "bmi",
            "hmo_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
