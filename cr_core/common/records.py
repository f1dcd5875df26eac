# cr_core/common/records.py
from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Generic, Optional, TypeVar

from django.db import models, transaction
from rest_framework.exceptions import NotFound

from cr_core.common.ownership import assert_owner
from cr_core.common.repository import PaginatedResult, PaginationQuery, Repository
from cr_core.iam.models import Account

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=models.Model)


class ClinicalRecordService(Generic[R]):
    """
    Shared behaviour for provider-issued records attached to a patient
    (medications, lab tests, referrals).

    Subclasses set:
      - label: human name used in messages ("Medication")
      - EDITABLE_FIELDS: fields accepted by create/update
      - SEARCH_FIELDS: default search fields for list
    """
    label = "Record"
    EDITABLE_FIELDS: frozenset[str] = frozenset()
    SEARCH_FIELDS: tuple[str, ...] = ("tracking_id",)

    def __init__(
        self,
        *,
        records: Repository[R],
        providers: Repository,
        patients: Repository,
        encounters: Repository,
    ):
        self.records = records
        self.providers = providers
        self.patients = patients
        self.encounters = encounters

    @property
    def not_owner_msg(self) -> str:
        return f"You do not own this {self.label.lower()}"

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    def _get(self, record_id) -> R:
        record = self.records.find_by_id(record_id)
        if record is None:
            raise NotFound(f"{self.label} not found")
        return record

    def _owned(self, *, account: Account, record_id) -> R:
        record = self._get(record_id)
        assert_owner(account, record, message=self.not_owner_msg, patient_field=None)
        return record

    def _editable(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in (data or {}).items() if k in self.EDITABLE_FIELDS}

    @staticmethod
    def _scope(*, provider_id=None, patient_id=None) -> dict[str, Any]:
        where: dict[str, Any] = {}
        if provider_id:
            where["provider_id"] = provider_id
        if patient_id:
            where["patient_id"] = patient_id
        return where

    # ---------------------------------------------------------------------
    # Writes
    # ---------------------------------------------------------------------
    def create(self, *, account: Account, data: dict[str, Any]) -> R:
        patient = self.patients.find_by_id(data.get("patient_id"))
        if patient is None:
            raise NotFound("Patient not found")

        provider = self.providers.find_by_id(data.get("provider_id"))
        if provider is None:
            raise NotFound("Provider not found")

        encounter = None
        if data.get("encounter_id"):
            encounter = self.encounters.find_by_id(data["encounter_id"])
            if encounter is None:
                raise NotFound("Encounter not found")

        # a provider may only issue records under their own profile
        assert_owner(
            account,
            SimpleNamespace(provider_id=provider.pk),
            message=self.not_owner_msg,
            patient_field=None,
        )

        record = self.records.create(
            patient=patient,
            provider=provider,
            encounter=encounter,
            **self._editable(data),
        )
        logger.info("%s %s created for patient %s", self.label, record.tracking_id, patient.id)
        return record

    @transaction.atomic
    def update(self, *, account: Account, record_id, data: dict[str, Any]) -> R:
        record = self._owned(account=account, record_id=record_id)
        return self.records.update(record, **self._editable(data))

    @transaction.atomic
    def delete(self, *, account: Account, record_id) -> None:
        record = self._owned(account=account, record_id=record_id)
        self.records.delete(record)
        logger.info("%s %s deleted", self.label, record_id)

    # ---------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------
    def find_all(self, query: PaginationQuery) -> PaginatedResult[R]:
        qs = self.records.get_queryset().select_related("patient", "provider", "encounter")
        return self.records.find_paginated(query.with_search_fields(self.SEARCH_FIELDS), queryset=qs)

    def find_by_id(self, record_id) -> R:
        return self._get(record_id)

    def metrics(self, *, provider_id: Optional[Any] = None, patient_id: Optional[Any] = None) -> dict[str, int]:
        return {"total": self.records.count(**self._scope(provider_id=provider_id, patient_id=patient_id))}
