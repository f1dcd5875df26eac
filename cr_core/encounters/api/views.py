# cr_core/encounters/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.pagination import pagination_query
from cr_core.common.api.responses import created, envelope
from cr_core.common.permissions import (
    ADMIN_ROLES,
    ALL_ROLES,
    ROLE_PATIENT,
    ROLE_PROVIDER,
    BaseRolePermission,
)
from cr_core.encounters.api.serializers import (
    CancelEncounterSerializer,
    EncounterCreateSerializer,
    EncounterMetricsQuerySerializer,
    EncounterMetricsSerializer,
    EncounterSerializer,
    EncounterUpdateSerializer,
    RescheduleEncounterSerializer,
)
from cr_core.encounters.models import Encounter

PARTICIPANTS = {ROLE_PROVIDER, ROLE_PATIENT} | ADMIN_ROLES


class EncounterPermission(BaseRolePermission):
    """
    Role gate only. Ownership (provider / patient of the encounter) is checked
    by the service once the row is loaded.
    """
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": ALL_ROLES,
        "partial_update": PARTICIPANTS,
        "update": PARTICIPANTS,
        "start": PARTICIPANTS,
        "complete": PARTICIPANTS,
        "cancel": PARTICIPANTS,
        "reschedule": PARTICIPANTS,
        "destroy": {ROLE_PROVIDER} | ADMIN_ROLES,
        "metrics": ALL_ROLES,
    }


@extend_schema_view(
    list=extend_schema(tags=["Encounters"], responses={200: EncounterSerializer(many=True)}),
    retrieve=extend_schema(tags=["Encounters"], responses={200: EncounterSerializer}),
    create=extend_schema(tags=["Encounters"], request=EncounterCreateSerializer, responses={201: EncounterSerializer}),
    partial_update=extend_schema(
        tags=["Encounters"], request=EncounterUpdateSerializer, responses={200: EncounterSerializer}
    ),
    destroy=extend_schema(tags=["Encounters"], responses={200: None}),
    start=extend_schema(tags=["Encounters"], request=None, responses={200: EncounterSerializer}),
    complete=extend_schema(tags=["Encounters"], request=None, responses={200: EncounterSerializer}),
    cancel=extend_schema(tags=["Encounters"], request=CancelEncounterSerializer, responses={200: EncounterSerializer}),
    reschedule=extend_schema(
        tags=["Encounters"], request=RescheduleEncounterSerializer, responses={200: EncounterSerializer}
    ),
    metrics=extend_schema(
        tags=["Encounters"], parameters=[EncounterMetricsQuerySerializer], responses={200: EncounterMetricsSerializer}
    ),
)
class EncounterViewSet(ServiceViewMixin, viewsets.ViewSet):
    permission_classes = [EncounterPermission]
    serializer_class = EncounterSerializer
    queryset = Encounter.objects.none()

    # ------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------
    def list(self, request):
        result = self.services.encounters.find_all(pagination_query(request))
        return envelope("Encounters found", result.to_dict(EncounterSerializer))

    def retrieve(self, request, pk=None):
        encounter = self.services.encounters.find_by_id(pk)
        return envelope("Encounter found", EncounterSerializer(encounter).data)

    def create(self, request):
        ser = EncounterCreateSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)

        encounter = self.services.encounters.create(data=ser.validated_data)
        return created("Encounter created successfully", EncounterSerializer(encounter).data)

    def partial_update(self, request, pk=None):
        ser = EncounterUpdateSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)

        encounter = self.services.encounters.update(account=self.account, encounter_id=pk, data=ser.validated_data)
        return envelope("Encounter updated successfully", EncounterSerializer(encounter).data)

    def destroy(self, request, pk=None):
        self.services.encounters.delete(account=self.account, encounter_id=pk)
        return envelope("Encounter deleted successfully")

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------
    @action(detail=True, methods=["patch", "post"], url_path="start")
    def start(self, request, pk=None):
        encounter = self.services.encounters.start(account=self.account, encounter_id=pk)
        return envelope("Encounter started", EncounterSerializer(encounter).data)

    @action(detail=True, methods=["patch", "post"], url_path="complete")
    def complete(self, request, pk=None):
        encounter = self.services.encounters.complete(account=self.account, encounter_id=pk)
        return envelope("Encounter completed", EncounterSerializer(encounter).data)

    @action(detail=True, methods=["patch", "post"], url_path="cancel")
    def cancel(self, request, pk=None):
        ser = CancelEncounterSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)

        encounter = self.services.encounters.cancel(
            account=self.account, encounter_id=pk, reason=ser.validated_data.get("reason")
        )
        return envelope("Encounter cancelled", EncounterSerializer(encounter).data)

    @action(detail=True, methods=["patch", "post"], url_path="reschedule")
    def reschedule(self, request, pk=None):
        ser = RescheduleEncounterSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)

        encounter = self.services.encounters.reschedule(
            account=self.account,
            encounter_id=pk,
            date=ser.validated_data["date"],
            reason=ser.validated_data.get("reason"),
        )
        return envelope("Encounter rescheduled", EncounterSerializer(encounter).data)

    @action(detail=False, methods=["get"], url_path="metrics")
    def metrics(self, request):
        ser = EncounterMetricsQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)

        data = self.services.encounters.metrics(**ser.validated_data)
        return envelope("Metrics retrieved successfully", data)
