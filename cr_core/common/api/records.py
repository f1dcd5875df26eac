# cr_core/common/api/records.py
from __future__ import annotations

from rest_framework import serializers, viewsets
from rest_framework.decorators import action

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.pagination import pagination_query
from cr_core.common.api.responses import created, envelope
from cr_core.common.permissions import ADMIN_ROLES, ALL_ROLES, ROLE_PROVIDER, BaseRolePermission

PROVIDER_OR_ADMIN = {ROLE_PROVIDER} | ADMIN_ROLES


class RecordPermission(BaseRolePermission):
    """Providers issue and manage records; everybody authenticated can read them."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": PROVIDER_OR_ADMIN,
        "update": PROVIDER_OR_ADMIN,
        "partial_update": PROVIDER_OR_ADMIN,
        "destroy": PROVIDER_OR_ADMIN,
        "metrics": PROVIDER_OR_ADMIN,
    }


class RecordMetricsQuerySerializer(serializers.Serializer):
    provider_id = serializers.UUIDField(required=False)
    patient_id = serializers.UUIDField(required=False)


class RecordViewSet(ServiceViewMixin, viewsets.ViewSet):
    """
    CRUD + metrics over a ClinicalRecordService.

    Subclasses set service_name, label, label_plural and the three serializers.
    """
    permission_classes = [RecordPermission]

    service_name: str = ""
    label: str = "Record"
    label_plural: str = "Records"

    create_serializer_class: type[serializers.Serializer]
    update_serializer_class: type[serializers.Serializer]

    @property
    def service(self):
        return getattr(self.services, self.service_name)

    def list(self, request):
        result = self.service.find_all(pagination_query(request))
        return envelope(f"{self.label_plural} found", result.to_dict(self.serializer_class))

    def retrieve(self, request, pk=None):
        record = self.service.find_by_id(pk)
        return envelope(f"{self.label} found", self.serializer_class(record).data)

    def create(self, request):
        ser = self.create_serializer_class(data=request.data or {})
        ser.is_valid(raise_exception=True)

        record = self.service.create(account=self.account, data=ser.validated_data)
        return created(f"{self.label} created successfully", self.serializer_class(record).data)

    def partial_update(self, request, pk=None):
        ser = self.update_serializer_class(data=request.data or {})
        ser.is_valid(raise_exception=True)

        record = self.service.update(account=self.account, record_id=pk, data=ser.validated_data)
        return envelope(f"{self.label} updated successfully", self.serializer_class(record).data)

    def destroy(self, request, pk=None):
        self.service.delete(account=self.account, record_id=pk)
        return envelope(f"{self.label} deleted successfully")

    @action(detail=False, methods=["get"], url_path="metrics")
    def metrics(self, request):
        ser = RecordMetricsQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        return envelope(f"{self.label} metrics fetched", self.service.metrics(**ser.validated_data))
