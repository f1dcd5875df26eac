# cr_core/iam/services.py
from __future__ import annotations

import logging
import secrets
from datetime import timedelta

from django.contrib.auth.models import AbstractBaseUser, update_last_login
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from cr_core.common.api.exceptions import ConflictError
from cr_core.common.repository import PaginatedResult, PaginationQuery, Repository
from cr_core.iam.auth import issue_tokens
from cr_core.iam.models import Account, Role
from cr_core.mail.services import MailService

logger = logging.getLogger(__name__)

OTP_LENGTH = 6
SELF_REGISTER_ROLES = (Role.PATIENT, Role.PROVIDER)


def generate_otp() -> str:
    return "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH))


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """
    Registration, email verification, login and password flows.
    Every mutation of credentials lives here.
    """

    def __init__(
        self,
        *,
        accounts: Repository[Account],
        users: Repository[AbstractBaseUser],
        mail: MailService,
        otp_ttl: timedelta = timedelta(hours=24),
    ):
        self.accounts = accounts
        self.users = users
        self.mail = mail
        self.otp_ttl = otp_ttl

    # ------------------------------------------------------------
    # OTP helpers
    # ------------------------------------------------------------
    def _issue_otp(self, account: Account) -> str:
        otp = generate_otp()
        self.accounts.update(account, otp=otp, otp_expires_at=timezone.now() + self.otp_ttl)
        return otp

    def _account_for_otp(self, otp: str) -> Account:
        otp = (otp or "").strip()
        account = self.accounts.find_one(otp=otp) if otp else None
        if account is None:
            raise ValidationError("Invalid OTP")
        if account.otp_expires_at is None or account.otp_expires_at < timezone.now():
            raise ValidationError("OTP expired. Please request another.")
        return account

    def _account_for_email(self, email: str) -> Account:
        account = self.accounts.find_one(user__email=normalize_email(email))
        if account is None:
            raise NotFound("No account found with this email")
        return account

    # ------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------
    @transaction.atomic
    def register(self, *, email: str, password: str, role: str) -> Account:
        email = normalize_email(email)
        if role not in SELF_REGISTER_ROLES:
            raise ValidationError({"role": f"Invalid role. Allowed: {[r.value for r in SELF_REGISTER_ROLES]}"})

        if self.users.find_one(username=email) is not None:
            raise ConflictError("Account already exists")

        user = self.users.model._default_manager.create_user(username=email, email=email, password=password)
        account = self.accounts.create(user=user, role=role)
        otp = self._issue_otp(account)

        self.mail.send_mail(
            to=email,
            subject="Verify Your Email",
            text=f"Your verification code is {otp}. It expires in {int(self.otp_ttl.total_seconds() // 3600)} hours.",
        )
        logger.info("Registered %s account %s", role, account.id)
        return account

    @transaction.atomic
    def verify_email(self, *, otp: str) -> Account:
        account = self._account_for_otp(otp)
        self.accounts.update(account, is_email_verified=True, otp="", otp_expires_at=None)

        self.mail.send_mail(
            to=account.email,
            subject="Email Verified",
            text="Your email has been successfully verified. You can now log in.",
        )
        return account

    def login(self, *, email: str, password: str) -> tuple[Account, dict[str, str]]:
        user = self.users.find_one(username=normalize_email(email))
        if user is None or not user.is_active or not user.check_password(password):
            raise ValidationError("Invalid email or password")

        account = self.accounts.find_one(user=user)
        if account is None:
            raise ValidationError("Invalid email or password")

        if not account.is_email_verified:
            raise PermissionDenied("Please verify your email before logging in.")

        update_last_login(None, user)
        tokens = issue_tokens(account)

        self.mail.send_mail(
            to=account.email,
            subject="New Login Detected",
            text=f"A new login to your account was detected at {timezone.now():%Y-%m-%d %H:%M %Z}.",
        )
        logger.info("Account %s logged in", account.id)
        return account, tokens

    @transaction.atomic
    def forgot_password(self, *, email: str) -> Account:
        account = self._account_for_email(email)
        otp = self._issue_otp(account)
        self.mail.send_mail(
            to=account.email,
            subject="Password Reset Code",
            text=f"Your password reset code is {otp}.",
        )
        return account

    @transaction.atomic
    def reset_password(self, *, token: str, new_password: str) -> Account:
        account = self._account_for_otp(token)

        user = account.user
        user.set_password(new_password)
        user.save(update_fields=["password"])
        self.accounts.update(account, otp="", otp_expires_at=None)

        self.mail.send_mail(
            to=account.email,
            subject="Password Changed",
            text="Your password was successfully changed. If this wasn't you, please contact support immediately.",
        )
        return account

    @transaction.atomic
    def change_password(self, *, account: Account, password: str, new_password: str) -> Account:
        user = account.user
        if not user.check_password(password):
            raise ValidationError("Invalid old password")

        user.set_password(new_password)
        user.save(update_fields=["password"])

        self.mail.send_mail(
            to=account.email,
            subject="Password Changed",
            text="Your password was successfully changed. If this wasn't you, please reset it immediately.",
        )
        return account

    @transaction.atomic
    def resend_otp(self, *, email: str) -> Account:
        account = self._account_for_email(email)
        otp = self._issue_otp(account)
        self.mail.send_mail(to=account.email, subject="New OTP Code", text=f"Your new code is {otp}.")
        return account


class AccountService:
    SEARCH_FIELDS = ("user__email",)

    def __init__(self, *, accounts: Repository[Account]):
        self.accounts = accounts

    def find_all(self, query: PaginationQuery) -> PaginatedResult[Account]:
        qs = self.accounts.get_queryset().select_related("user")
        return self.accounts.find_paginated(query.with_search_fields(self.SEARCH_FIELDS), queryset=qs)

    def find_by_id(self, account_id) -> Account:
        account = self.accounts.find_by_id(account_id)
        if account is None:
            raise NotFound("Account not found")
        return account

    @transaction.atomic
    def ensure_for_superuser(self, user) -> Account:
        """
        createsuperuser makes a Django user without an Account row.
        Give it a verified SuperAdmin account the first time it calls the API.
        """
        account = self.accounts.upsert(
            lookup={"user": user},
            create={"role": Role.SUPER_ADMIN, "is_email_verified": True},
            update={},
        )
        logger.info("SuperAdmin account %s provisioned for user %s", account.id, user.pk)
        return account
