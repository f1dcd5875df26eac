# cr_core/referrals/services.py
from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import transaction

from cr_core.common.api.exceptions import ConflictError
from cr_core.common.records import ClinicalRecordService
from cr_core.iam.models import Account
from cr_core.referrals.models import Referral, ReferralStatus

logger = logging.getLogger(__name__)

# action -> (required current status, next status)
TRANSITIONS = {
    "approve": (ReferralStatus.PENDING, ReferralStatus.APPROVED),
    "reject": (ReferralStatus.PENDING, ReferralStatus.REJECTED),
    "ongoing": (ReferralStatus.APPROVED, ReferralStatus.ONGOING),
    "complete": (ReferralStatus.ONGOING, ReferralStatus.COMPLETED),
}


class ReferralService(ClinicalRecordService[Referral]):
    label = "Referral"
    EDITABLE_FIELDS = frozenset({"reason", "note", "urgency", "facility"})
    SEARCH_FIELDS = ("reason", "facility", "tracking_id")

    @transaction.atomic
    def transition(self, *, account: Account, record_id, action: str) -> Referral:
        """
        Move a referral along Pending -> Approved -> Ongoing -> Completed
        (or Pending -> Rejected). Anything else is a 409.
        """
        required, target = TRANSITIONS[action]
        referral = self._owned(account=account, record_id=record_id)

        if referral.status != required:
            raise ConflictError(
                f"Cannot move referral from '{referral.status}' to '{target}'"
            )

        referral = self.records.update(referral, status=target)
        logger.info("Referral %s moved to %s", referral.tracking_id, target)
        return referral

    def metrics(self, *, provider_id: Optional[Any] = None, patient_id: Optional[Any] = None) -> dict[str, int]:
        where = self._scope(provider_id=provider_id, patient_id=patient_id)
        by_status = self.records.count_by("status", ReferralStatus.values, **where)
        return {
            "total": self.records.count(**where),
            "pending": by_status[ReferralStatus.PENDING],
            "approved": by_status[ReferralStatus.APPROVED],
            "ongoing": by_status[ReferralStatus.ONGOING],
            "rejected": by_status[ReferralStatus.REJECTED],
            "completed": by_status[ReferralStatus.COMPLETED],
        }
