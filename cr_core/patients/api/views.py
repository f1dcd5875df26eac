# cr_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.pagination import pagination_query
from cr_core.common.api.responses import envelope
from cr_core.common.permissions import ADMIN_ROLES, ALL_ROLES, ROLE_PATIENT, BaseRolePermission
from cr_core.patients.api.serializers import PatientSerializer, PatientUpdateSerializer
from cr_core.patients.models import Patient


class PatientPermission(BaseRolePermission):
    admin_bypass = False
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "destroy": ADMIN_ROLES,
        "me": {ROLE_PATIENT},
    }


@extend_schema_view(
    list=extend_schema(tags=["Patients"], responses={200: PatientSerializer(many=True)}),
    retrieve=extend_schema(tags=["Patients"], responses={200: PatientSerializer}),
    destroy=extend_schema(tags=["Patients"], responses={200: None}),
    me=extend_schema(tags=["Patients"], request=PatientUpdateSerializer, responses={200: PatientSerializer}),
)
class PatientViewSet(ServiceViewMixin, viewsets.ViewSet):
    permission_classes = [PatientPermission]
    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    def list(self, request):
        result = self.services.patients.find_all(pagination_query(request))
        return envelope("Patients found", result.to_dict(PatientSerializer))

    def retrieve(self, request, pk=None):
        patient = self.services.patients.find_by_id(pk)
        return envelope("Patient found", PatientSerializer(patient).data)

    def destroy(self, request, pk=None):
        self.services.patients.delete(patient_id=pk)
        return envelope("Patient deleted successfully")

    @action(detail=False, methods=["get", "patch", "delete"], url_path="me")
    def me(self, request):
        service = self.services.patients
        account = self.account

        if request.method == "GET":
            return envelope("Patient found", PatientSerializer(service.get_profile(account=account)).data)

        if request.method == "DELETE":
            service.delete_profile(account=account)
            return envelope("Patient deleted successfully")

        ser = PatientUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        patient = service.update_profile(account=account, data=ser.validated_data)
        return envelope("Patient Updated", PatientSerializer(patient).data)
