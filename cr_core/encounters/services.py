# cr_core/encounters/services.py
from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from cr_core.branches.models import Branch
from cr_core.common.api.exceptions import ConflictError
from cr_core.common.ownership import assert_owner
from cr_core.common.repository import PaginatedResult, PaginationQuery, Repository
from cr_core.encounters.models import Encounter, EncounterStatus, EncounterType
from cr_core.iam.models import Account
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider

logger = logging.getLogger(__name__)

NOT_OWNER_MSG = "You do not own this encounter"

UPDATABLE_FIELDS = {
    "scheduled_date",
    "symptoms",
    "subjective",
    "objective",
    "assessment",
    "clinical_notes",
    "custom_fields",
}

NOT_STARTABLE = {EncounterStatus.IN_PROGRESS, EncounterStatus.COMPLETED, EncounterStatus.CANCELLED}


class EncounterService:
    SEARCH_FIELDS = ("clinical_notes",)

    def __init__(
        self,
        *,
        encounters: Repository[Encounter],
        providers: Repository[Provider],
        patients: Repository[Patient],
        branches: Repository[Branch],
    ):
        self.encounters = encounters
        self.providers = providers
        self.patients = patients
        self.branches = branches

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    def _get(self, encounter_id) -> Encounter:
        encounter = self.encounters.find_by_id(encounter_id)
        if encounter is None:
            raise NotFound("Encounter not found")
        return encounter

    @staticmethod
    def _check_owner(account: Account, encounter: Encounter, *, patients_allowed: bool = True) -> None:
        assert_owner(
            account,
            encounter,
            message=NOT_OWNER_MSG,
            patient_field="patient_id" if patients_allowed else None,
        )

    # ---------------------------------------------------------------------
    # Writes
    # ---------------------------------------------------------------------
    def create(self, *, data: dict[str, Any]) -> Encounter:
        """
        Existence checks run in a fixed order and stop at the first failure.
        They are not wrapped in a transaction with the insert.
        """
        provider = self.providers.find_by_id(data.get("provider_id"))
        if provider is None:
            raise NotFound("Provider not found")
        if not provider.available:
            raise ValidationError("Provider has been disabled")

        patient = self.patients.find_by_id(data.get("patient_id"))
        if patient is None:
            raise NotFound("Patient Profile not found")

        branch: Optional[Branch] = None
        if data.get("branch_id"):
            branch = self.branches.find_by_id(data["branch_id"])
            if branch is None:
                raise NotFound("Branch not found")
            if not branch.available:
                raise ValidationError("Branch has been disabled")

        follow_up: Optional[Encounter] = None
        if data.get("follow_up_encounter_id"):
            follow_up = self.encounters.find_by_id(data["follow_up_encounter_id"])
            if follow_up is None:
                raise NotFound("Follow-up encounter not found")
            if data.get("encounter_type") != EncounterType.FOLLOW_UP:
                raise ValidationError("Encounter type must be follow up if there's a follow up id")

        encounter = self.encounters.create(
            patient=patient,
            provider=provider,
            branch=branch,
            follow_up_encounter=follow_up,
            encounter_type=data["encounter_type"],
            scheduled_date=data["scheduled_date"],
            symptoms=data.get("symptoms") or [],
            subjective=data.get("subjective"),
            objective=data.get("objective"),
            assessment=data.get("assessment"),
            clinical_notes=data.get("clinical_notes") or "",
            custom_fields=data.get("custom_fields"),
        )
        logger.info("Encounter %s scheduled for patient %s with provider %s", encounter.id, patient.id, provider.id)
        return encounter

    @transaction.atomic
    def update(self, *, account: Account, encounter_id, data: dict[str, Any]) -> Encounter:
        encounter = self._get(encounter_id)
        self._check_owner(account, encounter)

        fields = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
        return self.encounters.update(encounter, **fields)

    @transaction.atomic
    def start(self, *, account: Account, encounter_id) -> Encounter:
        encounter = self._get(encounter_id)

        now = timezone.now()
        if encounter.scheduled_date > now:
            raise ValidationError("Cannot start encounter before scheduled date/time")

        if encounter.status in NOT_STARTABLE:
            raise ConflictError(f"Cannot start encounter with status '{encounter.status.lower()}'")

        self._check_owner(account, encounter)

        encounter = self.encounters.update(encounter, status=EncounterStatus.IN_PROGRESS, actual_start_time=now)
        logger.info("Encounter %s started", encounter.id)
        return encounter

    @transaction.atomic
    def complete(self, *, account: Account, encounter_id) -> Encounter:
        encounter = self._get(encounter_id)

        if encounter.status != EncounterStatus.IN_PROGRESS:
            raise ConflictError(
                f"Cannot complete encounter with status '{encounter.status.lower()}', "
                "only encounters in progress can be completed"
            )

        self._check_owner(account, encounter)

        encounter = self.encounters.update(
            encounter, status=EncounterStatus.COMPLETED, actual_end_time=timezone.now()
        )
        logger.info("Encounter %s completed", encounter.id)
        return encounter

    @transaction.atomic
    def cancel(self, *, account: Account, encounter_id, reason: Optional[str] = None) -> Encounter:
        encounter = self._get(encounter_id)

        if encounter.status == EncounterStatus.CANCELLED:
            raise ValidationError("Encounter has been cancelled")

        self._check_owner(account, encounter)

        encounter = self.encounters.update(
            encounter, status=EncounterStatus.CANCELLED, cancellation_reason=reason or ""
        )
        logger.info("Encounter %s cancelled", encounter.id)
        return encounter

    @transaction.atomic
    def reschedule(self, *, account: Account, encounter_id, date, reason: Optional[str] = None) -> Encounter:
        encounter = self._get(encounter_id)

        if encounter.status != EncounterStatus.SCHEDULED:
            raise ConflictError(
                f"Cannot reschedule encounter with status '{encounter.status.lower()}', "
                "only scheduled encounters can be rescheduled"
            )

        self._check_owner(account, encounter)

        encounter = self.encounters.update(encounter, scheduled_date=date, reschedule_reason=reason or "")
        logger.info("Encounter %s rescheduled to %s", encounter.id, date)
        return encounter

    @transaction.atomic
    def delete(self, *, account: Account, encounter_id) -> None:
        encounter = self._get(encounter_id)
        self._check_owner(account, encounter, patients_allowed=False)
        self.encounters.delete(encounter)
        logger.info("Encounter %s deleted", encounter_id)

    # ---------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------
    def find_all(self, query: PaginationQuery) -> PaginatedResult[Encounter]:
        qs = self.encounters.get_queryset().select_related("patient", "provider", "branch")
        return self.encounters.find_paginated(query.with_search_fields(self.SEARCH_FIELDS), queryset=qs)

    def find_by_id(self, encounter_id) -> Encounter:
        return self._get(encounter_id)

    def metrics(self, *, patient_id=None, provider_id=None, branch_id=None) -> dict[str, int]:
        where = {
            k: v
            for k, v in {"patient_id": patient_id, "provider_id": provider_id, "branch_id": branch_id}.items()
            if v
        }
        by_status = self.encounters.count_by("status", EncounterStatus.values, **where)
        by_type = self.encounters.count_by("encounter_type", EncounterType.values, **where)
        return {
            "total": self.encounters.count(**where),
            "scheduled": by_status[EncounterStatus.SCHEDULED],
            "in_progress": by_status[EncounterStatus.IN_PROGRESS],
            "completed": by_status[EncounterStatus.COMPLETED],
            "cancelled": by_status[EncounterStatus.CANCELLED],
            "consultation": by_type[EncounterType.CONSULTATION],
            "follow_ups": by_type[EncounterType.FOLLOW_UP],
        }
