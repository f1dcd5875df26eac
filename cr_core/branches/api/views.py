# cr_core/branches/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.pagination import pagination_query
from cr_core.common.api.responses import created, envelope
from cr_core.common.permissions import ADMIN_ROLES, ALL_ROLES, ROLE_PROVIDER, BaseRolePermission
from cr_core.branches.api.serializers import (
    BranchCreateSerializer,
    BranchMetricsSerializer,
    BranchSerializer,
    BranchUpdateSerializer,
)
from cr_core.branches.models import Branch

PROVIDER_OR_ADMIN = {ROLE_PROVIDER} | ADMIN_ROLES


class BranchPermission(BaseRolePermission):
    admin_bypass = False
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_PROVIDER},
        "partial_update": PROVIDER_OR_ADMIN,
        "update": PROVIDER_OR_ADMIN,
        "destroy": PROVIDER_OR_ADMIN,
        "toggle_availability": PROVIDER_OR_ADMIN,
        "metrics": ALL_ROLES,
        "provider_metrics": ALL_ROLES,
    }


@extend_schema_view(
    list=extend_schema(tags=["Branches"], responses={200: BranchSerializer(many=True)}),
    retrieve=extend_schema(tags=["Branches"], responses={200: BranchSerializer}),
    create=extend_schema(tags=["Branches"], request=BranchCreateSerializer, responses={201: BranchSerializer}),
    partial_update=extend_schema(tags=["Branches"], request=BranchUpdateSerializer, responses={200: BranchSerializer}),
    destroy=extend_schema(tags=["Branches"], responses={200: None}),
    toggle_availability=extend_schema(tags=["Branches"], request=None, responses={200: BranchSerializer}),
    metrics=extend_schema(tags=["Branches"], responses={200: BranchMetricsSerializer}),
    provider_metrics=extend_schema(tags=["Branches"], responses={200: BranchMetricsSerializer}),
)
class BranchViewSet(ServiceViewMixin, viewsets.ViewSet):
    permission_classes = [BranchPermission]
    serializer_class = BranchSerializer
    queryset = Branch.objects.none()

    def list(self, request):
        result = self.services.branches.find_all(pagination_query(request))
        return envelope("Branches found", result.to_dict(BranchSerializer))

    def retrieve(self, request, pk=None):
        branch = self.services.branches.find_by_id(pk)
        return envelope("Branch found", BranchSerializer(branch).data)

    def create(self, request):
        ser = BranchCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        branch = self.services.branches.create(account=self.account, data=ser.validated_data)
        return created("Branch Created", BranchSerializer(branch).data)

    def partial_update(self, request, pk=None):
        ser = BranchUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        branch = self.services.branches.update(account=self.account, branch_id=pk, data=ser.validated_data)
        return envelope("Branch Updated", BranchSerializer(branch).data)

    def destroy(self, request, pk=None):
        self.services.branches.delete(account=self.account, branch_id=pk)
        return envelope("Branch deleted successfully")

    @action(detail=True, methods=["post", "patch"], url_path="toggle-availability")
    def toggle_availability(self, request, pk=None):
        branch = self.services.branches.toggle_availability(account=self.account, branch_id=pk)
        return envelope("Branch updated successfully", BranchSerializer(branch).data)

    @action(detail=False, methods=["get"], url_path="metrics")
    def metrics(self, request):
        return envelope("Metrics retrieved successfully", self.services.branches.metrics())

    @action(detail=False, methods=["get"], url_path=r"metrics/(?P<provider_id>[^/.]+)")
    def provider_metrics(self, request, provider_id=None):
        return envelope("Metrics retrieved successfully", self.services.branches.metrics(provider_id=provider_id))
