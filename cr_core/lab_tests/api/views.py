# cr_core/lab_tests/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view

from cr_core.common.api.records import RecordMetricsQuerySerializer, RecordViewSet
from cr_core.lab_tests.api.serializers import (
    LabTestCreateSerializer,
    LabTestMetricsSerializer,
    LabTestSerializer,
    LabTestUpdateSerializer,
)
from cr_core.lab_tests.models import LabTest


@extend_schema_view(
    list=extend_schema(tags=["Tests"], responses={200: LabTestSerializer(many=True)}),
    retrieve=extend_schema(tags=["Tests"], responses={200: LabTestSerializer}),
    create=extend_schema(tags=["Tests"], request=LabTestCreateSerializer, responses={201: LabTestSerializer}),
    partial_update=extend_schema(tags=["Tests"], request=LabTestUpdateSerializer, responses={200: LabTestSerializer}),
    destroy=extend_schema(tags=["Tests"], responses={200: None}),
    metrics=extend_schema(
        tags=["Tests"], parameters=[RecordMetricsQuerySerializer], responses={200: LabTestMetricsSerializer}
    ),
)
class LabTestViewSet(RecordViewSet):
    service_name = "lab_tests"
    label = "Test"
    label_plural = "Tests"

    serializer_class = LabTestSerializer
    create_serializer_class = LabTestCreateSerializer
    update_serializer_class = LabTestUpdateSerializer
    queryset = LabTest.objects.none()
