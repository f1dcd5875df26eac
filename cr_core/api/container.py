# cr_core/api/container.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.exceptions import NotFound

from cr_core.branches.models import Branch
from cr_core.branches.services import BranchService
from cr_core.common.permissions import get_account
from cr_core.common.repository import Repository
from cr_core.encounters.models import Encounter
from cr_core.encounters.services import EncounterService
from cr_core.iam.models import Account
from cr_core.iam.services import AccountService, AuthService
from cr_core.lab_tests.models import LabTest
from cr_core.lab_tests.services import LabTestService
from cr_core.mail.services import MailService
from cr_core.medications.models import Medication
from cr_core.medications.services import MedicationService
from cr_core.patients.models import Patient
from cr_core.patients.services import PatientService
from cr_core.providers.models import Provider
from cr_core.providers.services import ProviderService
from cr_core.referrals.models import Referral
from cr_core.referrals.services import ReferralService


@dataclass(frozen=True)
class Services:
    auth: AuthService
    accounts: AccountService
    providers: ProviderService
    branches: BranchService
    patients: PatientService
    encounters: EncounterService
    medications: MedicationService
    lab_tests: LabTestService
    referrals: ReferralService


def build_services(*, mail: Optional[MailService] = None) -> Services:
    """
    Wire repositories and services once. Everything is passed explicitly;
    no service reaches for another module's globals.
    """
    mail = mail or MailService()

    accounts = Repository(Account, extra_fields=("user__email",))
    users = Repository(get_user_model())
    providers = Repository(Provider)
    branches = Repository(Branch)
    patients = Repository(Patient)
    encounters = Repository(Encounter)

    otp_ttl = timedelta(hours=getattr(settings, "OTP_TTL_HOURS", 24))

    return Services(
        auth=AuthService(accounts=accounts, users=users, mail=mail, otp_ttl=otp_ttl),
        accounts=AccountService(accounts=accounts),
        providers=ProviderService(providers=providers),
        branches=BranchService(branches=branches, providers=providers),
        patients=PatientService(patients=patients),
        encounters=EncounterService(
            encounters=encounters,
            providers=providers,
            patients=patients,
            branches=branches,
        ),
        medications=MedicationService(
            records=Repository(Medication),
            providers=providers,
            patients=patients,
            encounters=encounters,
        ),
        lab_tests=LabTestService(
            records=Repository(LabTest),
            providers=providers,
            patients=patients,
            encounters=encounters,
        ),
        referrals=ReferralService(
            records=Repository(Referral),
            providers=providers,
            patients=patients,
            encounters=encounters,
        ),
    )


_services: Optional[Services] = None
_lock = threading.Lock()


def get_services() -> Services:
    global _services
    if _services is None:
        with _lock:
            if _services is None:
                _services = build_services()
    return _services


def set_services(services: Optional[Services]) -> None:
    """Swap the process-wide bundle (tests); None rebuilds lazily."""
    global _services
    with _lock:
        _services = services


class ServiceViewMixin:
    """
    Gives views access to the wired services and the caller's Account.
    """

    @property
    def services(self) -> Services:
        return get_services()

    @property
    def account(self) -> Account:
        user = self.request.user
        account = get_account(user)
        if account is None and getattr(user, "is_superuser", False):
            account = self.services.accounts.ensure_for_superuser(user)
        if account is None:
            raise NotFound("Account not found")
        return account
