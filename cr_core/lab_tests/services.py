# cr_core/lab_tests/services.py
from __future__ import annotations

from typing import Any, Optional

from cr_core.common.records import ClinicalRecordService
from cr_core.lab_tests.models import LabTest, LabTestStatus


class LabTestService(ClinicalRecordService[LabTest]):
    label = "Test"
    EDITABLE_FIELDS = frozenset({"name", "note", "urgency", "tat", "facility", "status"})
    SEARCH_FIELDS = ("name", "facility", "tracking_id")

    def metrics(self, *, provider_id: Optional[Any] = None, patient_id: Optional[Any] = None) -> dict[str, int]:
        where = self._scope(provider_id=provider_id, patient_id=patient_id)
        by_status = self.records.count_by("status", LabTestStatus.values, **where)
        return {
            "total": self.records.count(**where),
            "pending": by_status[LabTestStatus.PENDING],
            "approved": by_status[LabTestStatus.APPROVED],
            "rejected": by_status[LabTestStatus.REJECTED],
        }
