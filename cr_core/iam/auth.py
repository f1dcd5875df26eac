# cr_core/iam/auth.py

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import RefreshToken

from cr_core.iam.models import Account


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Authenticate using:
      1) Authorization: Bearer <access>
      2) HttpOnly cookie containing access token

    authenticate_header() is inherited, so a missing/invalid token is always a 401.
    """

    def authenticate(self, request):
        # 1) Prefer Authorization header
        header = self.get_header(request)
        if header:
            return super().authenticate(request)

        # 2) Cookie access token
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "cr_access")
        raw_token = request.COOKIES.get(cookie_name)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        user = self.get_user(validated_token)
        return user, validated_token


def issue_tokens(account: Account) -> dict[str, str]:
    """
    Access + refresh pair. Role and email ride along as claims so clients
    don't need a /me round-trip to render role-specific screens.
    """
    refresh = RefreshToken.for_user(account.user)
    refresh["role"] = account.role
    refresh["email"] = account.email

    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }
