# cr_core/iam/api/auth.py

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenRefreshSerializer

from cr_core.api.container import ServiceViewMixin
from cr_core.common.api.responses import envelope
from cr_core.common.permissions import get_account
from cr_core.iam.api.serializers import (
    AccountSerializer,
    ChangePasswordSerializer,
    EmailOnlySerializer,
    LoginResponseSerializer,
    LoginSerializer,
    RefreshSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    TokenPairSerializer,
    VerifyEmailSerializer,
)


def _seconds(value: Any) -> int:
    """
    Convert a JWT lifetime setting into seconds.
    Supports timedelta OR int/float (already seconds).
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    try:
        return int(value)
    except (TypeError, ValueError):
        # 0 means "session cookie"
        return 0


def _set_auth_cookies(response, *, access: str, refresh: str) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}

    access_name = jwt_cfg.get("AUTH_COOKIE", "cr_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "cr_refresh")

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    response.set_cookie(
        access_name,
        access,
        max_age=_seconds(jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=60))),
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )
    response.set_cookie(
        refresh_name,
        refresh,
        max_age=_seconds(jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=7))),
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )


def _clear_auth_cookies(response) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    response.delete_cookie(jwt_cfg.get("AUTH_COOKIE", "cr_access"), path="/")
    response.delete_cookie(jwt_cfg.get("AUTH_COOKIE_REFRESH", "cr_refresh"), path="/")


class RegisterView(ServiceViewMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=RegisterSerializer, responses={201: AccountSerializer}, tags=["Auth"])
    def post(self, request):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        account = self.services.auth.register(**ser.validated_data)
        return envelope(
            "Successfully created account. Check your email for the verification code.",
            AccountSerializer(account).data,
            status_code=status.HTTP_201_CREATED,
        )


class VerifyEmailView(ServiceViewMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=VerifyEmailSerializer, responses={200: AccountSerializer}, tags=["Auth"])
    def post(self, request):
        ser = VerifyEmailSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        account = self.services.auth.verify_email(otp=ser.validated_data["otp"])
        return envelope("Successfully verified account", AccountSerializer(account).data)


class LoginView(ServiceViewMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=LoginSerializer, responses={200: LoginResponseSerializer}, tags=["Auth"])
    def post(self, request):
        ser = LoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        account, tokens = self.services.auth.login(**ser.validated_data)

        res = envelope(
            "Successfully logged in",
            {"account": AccountSerializer(account).data, "tokens": tokens},
        )
        _set_auth_cookies(res, access=tokens["access"], refresh=tokens["refresh"])
        return res


class RefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=RefreshSerializer, responses={200: TokenPairSerializer}, tags=["Auth"])
    def post(self, request):
        jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
        refresh = request.data.get("refresh") or request.COOKIES.get(jwt_cfg.get("AUTH_COOKIE_REFRESH", "cr_refresh"))

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        serializer.is_valid(raise_exception=True)

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh", refresh)

        res = envelope("Token refreshed", {"access": access, "refresh": new_refresh})
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: None}, tags=["Auth"])
    def post(self, request):
        res = envelope("Logged out")
        _clear_auth_cookies(res)
        return res


class ForgotPasswordView(ServiceViewMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=EmailOnlySerializer, responses={200: None}, tags=["Auth"])
    def post(self, request):
        ser = EmailOnlySerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        self.services.auth.forgot_password(email=ser.validated_data["email"])
        return envelope("Password reset code sent successfully")


class ResetPasswordView(ServiceViewMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=ResetPasswordSerializer, responses={200: None}, tags=["Auth"])
    def post(self, request):
        ser = ResetPasswordSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        self.services.auth.reset_password(**ser.validated_data)
        return envelope("Password updated successfully")


class ChangePasswordView(ServiceViewMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=ChangePasswordSerializer, responses={200: None}, tags=["Auth"])
    def post(self, request):
        ser = ChangePasswordSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        account = get_account(request.user)
        if account is None:
            raise NotFound("Account not found")

        self.services.auth.change_password(account=account, **ser.validated_data)
        return envelope("Password Changed")


class ResendOtpView(ServiceViewMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=EmailOnlySerializer, responses={200: None}, tags=["Auth"])
    def post(self, request):
        ser = EmailOnlySerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        self.services.auth.resend_otp(email=ser.validated_data["email"])
        return envelope("OTP resent successfully")
