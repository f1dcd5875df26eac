# cr_core/medications/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view

from cr_core.common.api.records import RecordMetricsQuerySerializer, RecordViewSet
from cr_core.medications.api.serializers import (
    MedicationCreateSerializer,
    MedicationMetricsSerializer,
    MedicationSerializer,
    MedicationUpdateSerializer,
)
from cr_core.medications.models import Medication


@extend_schema_view(
    list=extend_schema(tags=["Medications"], responses={200: MedicationSerializer(many=True)}),
    retrieve=extend_schema(tags=["Medications"], responses={200: MedicationSerializer}),
    create=extend_schema(tags=["Medications"], request=MedicationCreateSerializer, responses={201: MedicationSerializer}),
    partial_update=extend_schema(
        tags=["Medications"], request=MedicationUpdateSerializer, responses={200: MedicationSerializer}
    ),
    destroy=extend_schema(tags=["Medications"], responses={200: None}),
    metrics=extend_schema(
        tags=["Medications"], parameters=[RecordMetricsQuerySerializer], responses={200: MedicationMetricsSerializer}
    ),
)
class MedicationViewSet(RecordViewSet):
    service_name = "medications"
    label = "Medication"
    label_plural = "Medications"

    serializer_class = MedicationSerializer
    create_serializer_class = MedicationCreateSerializer
    update_serializer_class = MedicationUpdateSerializer
    queryset = Medication.objects.none()
