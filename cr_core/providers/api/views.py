# cr_core/providers/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.pagination import pagination_query
from cr_core.common.api.responses import envelope
from cr_core.common.permissions import ADMIN_ROLES, ALL_ROLES, ROLE_PROVIDER, BaseRolePermission
from cr_core.providers.api.serializers import (
    ProviderMetricsSerializer,
    ProviderSerializer,
    ProvidersMetricsSerializer,
    ProviderUpdateSerializer,
)
from cr_core.providers.models import Provider


class ProviderPermission(BaseRolePermission):
    """Own-profile endpoints are Provider-only; admins can remove any provider."""
    admin_bypass = False
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "destroy": ADMIN_ROLES,
        "me": {ROLE_PROVIDER},
        "toggle_availability": {ROLE_PROVIDER},
        "metrics": ALL_ROLES,
        "provider_metrics": ALL_ROLES,
    }


@extend_schema_view(
    list=extend_schema(tags=["Providers"], responses={200: ProviderSerializer(many=True)}),
    retrieve=extend_schema(tags=["Providers"], responses={200: ProviderSerializer}),
    destroy=extend_schema(tags=["Providers"], responses={200: None}),
    me=extend_schema(tags=["Providers"], request=ProviderUpdateSerializer, responses={200: ProviderSerializer}),
    toggle_availability=extend_schema(tags=["Providers"], request=None, responses={200: ProviderSerializer}),
    metrics=extend_schema(tags=["Providers"], responses={200: ProvidersMetricsSerializer}),
    provider_metrics=extend_schema(tags=["Providers"], responses={200: ProviderMetricsSerializer}),
)
class ProviderViewSet(ServiceViewMixin, viewsets.ViewSet):
    permission_classes = [ProviderPermission]
    serializer_class = ProviderSerializer
    queryset = Provider.objects.none()

    def list(self, request):
        result = self.services.providers.find_all(pagination_query(request))
        return envelope("Providers found", result.to_dict(ProviderSerializer))

    def retrieve(self, request, pk=None):
        provider = self.services.providers.find_by_id(pk)
        return envelope("Provider found", ProviderSerializer(provider).data)

    def destroy(self, request, pk=None):
        self.services.providers.delete(provider_id=pk)
        return envelope("Provider deleted successfully")

    @action(detail=False, methods=["get", "patch", "delete"], url_path="me")
    def me(self, request):
        service = self.services.providers
        account = self.account

        if request.method == "GET":
            return envelope("Provider found", ProviderSerializer(service.get_profile(account=account)).data)

        if request.method == "DELETE":
            service.delete_profile(account=account)
            return envelope("Provider deleted successfully")

        ser = ProviderUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        provider = service.update_profile(account=account, data=ser.validated_data)
        return envelope("Provider Updated", ProviderSerializer(provider).data)

    @action(detail=False, methods=["post", "patch"], url_path="me/toggle-availability")
    def toggle_availability(self, request):
        provider = self.services.providers.toggle_availability(account=self.account)
        return envelope("Provider Updated", ProviderSerializer(provider).data)

    @action(detail=False, methods=["get"], url_path="metrics")
    def metrics(self, request):
        return envelope("Aggregated provider metrics retrieved", self.services.providers.metrics())

    @action(detail=True, methods=["get"], url_path="metrics")
    def provider_metrics(self, request, pk=None):
        return envelope("Provider metrics retrieved", self.services.providers.metrics_for(provider_id=pk))
