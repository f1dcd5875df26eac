# cr_core/referrals/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.decorators import action

from cr_core.common.api.records import PROVIDER_OR_ADMIN, RecordMetricsQuerySerializer, RecordPermission, RecordViewSet
from cr_core.common.api.responses import envelope
from cr_core.referrals.api.serializers import (
    ReferralCreateSerializer,
    ReferralMetricsSerializer,
    ReferralSerializer,
    ReferralUpdateSerializer,
)
from cr_core.referrals.models import Referral


class ReferralPermission(RecordPermission):
    allowed_roles_per_action = {
        **RecordPermission.allowed_roles_per_action,
        "approve": PROVIDER_OR_ADMIN,
        "reject": PROVIDER_OR_ADMIN,
        "ongoing": PROVIDER_OR_ADMIN,
        "complete": PROVIDER_OR_ADMIN,
    }


@extend_schema_view(
    list=extend_schema(tags=["Referrals"], responses={200: ReferralSerializer(many=True)}),
    retrieve=extend_schema(tags=["Referrals"], responses={200: ReferralSerializer}),
    create=extend_schema(tags=["Referrals"], request=ReferralCreateSerializer, responses={201: ReferralSerializer}),
    partial_update=extend_schema(
        tags=["Referrals"], request=ReferralUpdateSerializer, responses={200: ReferralSerializer}
    ),
    destroy=extend_schema(tags=["Referrals"], responses={200: None}),
    metrics=extend_schema(
        tags=["Referrals"], parameters=[RecordMetricsQuerySerializer], responses={200: ReferralMetricsSerializer}
    ),
    approve=extend_schema(tags=["Referrals"], request=None, responses={200: ReferralSerializer}),
    reject=extend_schema(tags=["Referrals"], request=None, responses={200: ReferralSerializer}),
    ongoing=extend_schema(tags=["Referrals"], request=None, responses={200: ReferralSerializer}),
    complete=extend_schema(tags=["Referrals"], request=None, responses={200: ReferralSerializer}),
)
class ReferralViewSet(RecordViewSet):
    permission_classes = [ReferralPermission]

    service_name = "referrals"
    label = "Referral"
    label_plural = "Referrals"

    serializer_class = ReferralSerializer
    create_serializer_class = ReferralCreateSerializer
    update_serializer_class = ReferralUpdateSerializer
    queryset = Referral.objects.none()

    def _transition(self, pk, action_name: str, message: str):
        referral = self.service.transition(account=self.account, record_id=pk, action=action_name)
        return envelope(message, ReferralSerializer(referral).data)

    @action(detail=True, methods=["patch", "post"], url_path="approve")
    def approve(self, request, pk=None):
        return self._transition(pk, "approve", "Referral approved")

    @action(detail=True, methods=["patch", "post"], url_path="reject")
    def reject(self, request, pk=None):
        return self._transition(pk, "reject", "Referral rejected")

    @action(detail=True, methods=["patch", "post"], url_path="ongoing")
    def ongoing(self, request, pk=None):
        return self._transition(pk, "ongoing", "Referral is ongoing")

    @action(detail=True, methods=["patch", "post"], url_path="complete")
    def complete(self, request, pk=None):
        return self._transition(pk, "complete", "Referral completed")
