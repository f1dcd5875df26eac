# cr_core/providers/services.py
from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import NotFound

from cr_core.common.repository import PaginatedResult, PaginationQuery, Repository
from cr_core.iam.models import Account
from cr_core.providers.models import Provider

logger = logging.getLogger(__name__)

PROFILE_FIELDS = set(Provider.PROFILE_FIELDS) | {"available"}


def _percent(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole else 0


class ProviderService:
    SEARCH_FIELDS = ("name", "address", "phone_number", "whatsapp", "hotline")

    def __init__(self, *, providers: Repository[Provider]):
        self.providers = providers

    # ------------------------------------------------------------
    # Own profile (/providers/me)
    # ------------------------------------------------------------
    def get_profile(self, *, account: Account) -> Provider:
        provider = self.providers.find_one(account=account)
        if provider is None:
            raise NotFound("No provider profile found")
        return provider

    @transaction.atomic
    def update_profile(self, *, account: Account, data: dict[str, Any]) -> Provider:
        updates = {k: v for k, v in (data or {}).items() if k in PROFILE_FIELDS}
        return self.providers.upsert(lookup={"account": account}, create=updates, update=updates)

    @transaction.atomic
    def toggle_availability(self, *, account: Account) -> Provider:
        provider = self.get_profile(account=account)
        provider = self.providers.update(provider, available=not provider.available)
        logger.info("Provider %s availability -> %s", provider.id, provider.available)
        return provider

    @transaction.atomic
    def delete_profile(self, *, account: Account) -> None:
        self.providers.delete(self.get_profile(account=account))

    # ------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------
    def find_all(self, query: PaginationQuery) -> PaginatedResult[Provider]:
        return self.providers.find_paginated(query.with_search_fields(self.SEARCH_FIELDS))

    def find_by_id(self, provider_id) -> Provider:
        provider = self.providers.find_by_id(provider_id)
        if provider is None:
            raise NotFound("Provider not found")
        return provider

    @transaction.atomic
    def delete(self, *, provider_id) -> None:
        self.providers.delete(self.find_by_id(provider_id))

    # ------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------
    def metrics_for(self, *, provider_id) -> dict[str, Any]:
        provider = self.find_by_id(provider_id)

        filled = [f for f in Provider.PROFILE_FIELDS if getattr(provider, f)]
        now = timezone.now()

        return {
            "provider_id": str(provider.id),
            "available": bool(provider.available),
            "name_present": bool(provider.name),
            "contact_complete": any(getattr(provider, f) for f in Provider.CONTACT_FIELDS),
            "type_defined": bool(provider.type),
            "profile_complete_percent": round(len(filled) / len(Provider.PROFILE_FIELDS) * 100),
            "days_active": (now - provider.created_at).days,
            "last_updated_days_ago": (now - provider.updated_at).days,
        }

    def metrics(self) -> dict[str, Any]:
        has_contact = Q()
        for f in Provider.CONTACT_FIELDS:
            has_contact |= ~Q(**{f: ""})

        total = self.providers.count()
        available = self.providers.count(available=True)
        with_name = self.providers.get_queryset().exclude(name="").count()
        with_contact = self.providers.get_queryset().filter(has_contact).count()

        return {
            "totalProviders": total,
            "availableProviders": available,
            "providersWithName": with_name,
            "providersWithContact": with_contact,
            "availablePercent": _percent(available, total),
            "profileCompletePercent": _percent(with_name + with_contact, total * 2),
        }
