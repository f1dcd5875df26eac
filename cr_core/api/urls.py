# cr_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from cr_core.branches.api.views import BranchViewSet
from cr_core.encounters.api.views import EncounterViewSet
from cr_core.iam.api.accounts import AccountViewSet, MeView
from cr_core.iam.api.auth import (
    ChangePasswordView,
    ForgotPasswordView,
    LoginView,
    LogoutView,
    RefreshView,
    RegisterView,
    ResendOtpView,
    ResetPasswordView,
    VerifyEmailView,
)
from cr_core.lab_tests.api.views import LabTestViewSet
from cr_core.medications.api.views import MedicationViewSet
from cr_core.patients.api.views import PatientViewSet
from cr_core.providers.api.views import ProviderViewSet
from cr_core.referrals.api.views import ReferralViewSet

router = DefaultRouter()

router.register(r"accounts", AccountViewSet, basename="accounts")
router.register(r"providers", ProviderViewSet, basename="providers")
router.register(r"branches", BranchViewSet, basename="branches")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"encounters", EncounterViewSet, basename="encounters")

# provider-issued records
router.register(r"medications", MedicationViewSet, basename="medications")
router.register(r"tests", LabTestViewSet, basename="tests")
router.register(r"referrals", ReferralViewSet, basename="referrals")

urlpatterns = [
    # Auth + /me
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/verify-email/", VerifyEmailView.as_view(), name="verify-email"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/forgot-password/", ForgotPasswordView.as_view(), name="forgot-password"),
    path("auth/reset-password/", ResetPasswordView.as_view(), name="reset-password"),
    path("auth/change-password/", ChangePasswordView.as_view(), name="change-password"),
    path("auth/resend-otp/", ResendOtpView.as_view(), name="resend-otp"),
    path("me/", MeView.as_view(), name="me"),
]

urlpatterns += router.urls
