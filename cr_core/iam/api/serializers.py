# cr_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cr_core.iam.models import Account, Role
from cr_core.iam.services import SELF_REGISTER_ROLES


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    role = serializers.ChoiceField(choices=[r.value for r in SELF_REGISTER_ROLES], default=Role.PATIENT.value)


class VerifyEmailSerializer(serializers.Serializer):
    otp = serializers.CharField(min_length=6, max_length=6)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class EmailOnlySerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField()
    new_password = serializers.CharField(min_length=8, write_only=True)


class ChangePasswordSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(min_length=8, write_only=True)


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)


class AccountSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)
    last_login = serializers.DateTimeField(source="user.last_login", read_only=True)

    class Meta:
        model = Account
        fields = [
            "id",
            "email",
            "role",
            "is_email_verified",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TokenPairSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()


class LoginResponseSerializer(serializers.Serializer):
    account = AccountSerializer()
    tokens = TokenPairSerializer()
