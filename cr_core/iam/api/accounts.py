# cr_core/iam/api/accounts.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.pagination import pagination_query
from cr_core.common.api.responses import envelope
from cr_core.common.permissions import ADMIN_ROLES, BaseRolePermission, get_account
from cr_core.iam.api.serializers import AccountSerializer
from cr_core.iam.models import Account


class AccountPermission(BaseRolePermission):
    """Account directory is admin-only."""
    allowed_roles_per_action = {
        "list": ADMIN_ROLES,
        "retrieve": ADMIN_ROLES,
    }


@extend_schema_view(
    list=extend_schema(tags=["Accounts"], responses={200: AccountSerializer(many=True)}),
    retrieve=extend_schema(tags=["Accounts"], responses={200: AccountSerializer}),
)
class AccountViewSet(ServiceViewMixin, viewsets.ViewSet):
    permission_classes = [AccountPermission]
    serializer_class = AccountSerializer
    queryset = Account.objects.none()

    def list(self, request):
        result = self.services.accounts.find_all(pagination_query(request))
        return envelope("Accounts found", result.to_dict(AccountSerializer))

    def retrieve(self, request, pk=None):
        account = self.services.accounts.find_by_id(pk)
        return envelope("Account found", AccountSerializer(account).data)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Accounts"], responses={200: AccountSerializer})
    def get(self, request):
        account = get_account(request.user)
        if account is None:
            raise NotFound("Account not found")
        return envelope("Account found", AccountSerializer(account).data)
