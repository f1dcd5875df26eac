# cr_core/patients/services.py
from __future__ import annotations

from typing import Any

from django.db import transaction
from rest_framework.exceptions import NotFound

from cr_core.common.repository import PaginatedResult, PaginationQuery, Repository
from cr_core.iam.models import Account
from cr_core.patients.models import Patient

PROFILE_FIELDS = {
    "first_name",
    "last_name",
    "dob",
    "gender",
    "blood_group",
    "genotype",
    "address",
    "image",
    "phone_number",
    "height",
    "weight",
    "bmi",
    "hmo_id",
}


def compute_bmi(height_cm: float | None, weight_kg: float | None) -> float | None:
    if not height_cm or not weight_kg:
        return None
    meters = height_cm / 100
    return round(weight_kg / (meters * meters), 1)


class PatientService:
    SEARCH_FIELDS = (
        "first_name",
        "last_name",
        "gender",
        "blood_group",
        "genotype",
        "address",
        "phone_number",
        "hmo_id",
    )

    def __init__(self, *, patients: Repository[Patient]):
        self.patients = patients

    def get_profile(self, *, account: Account) -> Patient:
        patient = self.patients.find_one(account=account)
        if patient is None:
            raise NotFound("No patient profile found")
        return patient

    @transaction.atomic
    def update_profile(self, *, account: Account, data: dict[str, Any]) -> Patient:
        updates = {k: v for k, v in (data or {}).items() if k in PROFILE_FIELDS}

        # derive BMI when the caller sent height/weight but no explicit bmi
        if "bmi" not in updates and ("height" in updates or "weight" in updates):
            current = self.patients.find_one(account=account)
            height = updates.get("height", getattr(current, "height", None))
            weight = updates.get("weight", getattr(current, "weight", None))
            bmi = compute_bmi(height, weight)
            if bmi is not None:
                updates["bmi"] = bmi

        return self.patients.upsert(lookup={"account": account}, create=updates, update=updates)

    @transaction.atomic
    def delete_profile(self, *, account: Account) -> None:
        self.patients.delete(self.get_profile(account=account))

    def find_all(self, query: PaginationQuery) -> PaginatedResult[Patient]:
        return self.patients.find_paginated(query.with_search_fields(self.SEARCH_FIELDS))

    def find_by_id(self, patient_id) -> Patient:
        patient = self.patients.find_by_id(patient_id)
        if patient is None:
            raise NotFound("Patient not found")
        return patient

    @transaction.atomic
    def delete(self, *, patient_id) -> None:
        self.patients.delete(self.find_by_id(patient_id))
