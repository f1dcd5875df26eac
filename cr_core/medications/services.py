# cr_core/medications/services.py
from __future__ import annotations

from typing import Any, Optional

from cr_core.common.records import ClinicalRecordService
from cr_core.medications.models import Medication


class MedicationService(ClinicalRecordService[Medication]):
    label = "Medication"
    EDITABLE_FIELDS = frozenset(
        {"name", "dosage", "frequency", "duration", "instructions", "drug_form", "quantity"}
    )
    SEARCH_FIELDS = ("name", "tracking_id")

    def metrics(self, *, provider_id: Optional[Any] = None, patient_id: Optional[Any] = None) -> dict[str, int]:
        where = self._scope(provider_id=provider_id, patient_id=patient_id)
        qs = self.records.find_all(**where)
        return {
            "total": qs.count(),
            "patients": qs.values("patient_id").distinct().count(),
        }
