# cr_core/tests/helpers.py
from rest_framework_simplejwt.tokens import RefreshToken


def bearer(account) -> dict:
    """
    Real JWT header so the authentication class runs
    (force_authenticate skips it).
    """
    token = RefreshToken.for_user(account.user).access_token
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


def body(response) -> dict:
    return response.json()


def payload(response):
    return response.json()["responseObject"]
