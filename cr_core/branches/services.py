# cr_core/branches/services.py
from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import transaction
from rest_framework.exceptions import NotFound

from cr_core.common.ownership import assert_owner
from cr_core.common.repository import PaginatedResult, PaginationQuery, Repository
from cr_core.branches.models import Branch
from cr_core.iam.models import Account
from cr_core.providers.models import Provider

logger = logging.getLogger(__name__)

NOT_OWNER_MSG = "You do not own this branch"
EDITABLE_FIELDS = {"name", "address", "phone_number", "email", "whatsapp", "hotline", "available"}


class BranchService:
    SEARCH_FIELDS = ("name", "address", "email", "phone_number")

    def __init__(self, *, branches: Repository[Branch], providers: Repository[Provider]):
        self.branches = branches
        self.providers = providers

    def _get(self, branch_id) -> Branch:
        branch = self.branches.find_by_id(branch_id)
        if branch is None:
            raise NotFound("Branch not found")
        return branch

    def _owned(self, *, account: Account, branch_id) -> Branch:
        branch = self._get(branch_id)
        assert_owner(account, branch, message=NOT_OWNER_MSG, patient_field=None)
        return branch

    def create(self, *, account: Account, data: dict[str, Any]) -> Branch:
        provider = self.providers.find_one(account=account)
        if provider is None:
            raise NotFound("No provider profile found")

        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        branch = self.branches.create(provider=provider, **fields)
        logger.info("Branch %s created for provider %s", branch.id, provider.id)
        return branch

    @transaction.atomic
    def update(self, *, account: Account, branch_id, data: dict[str, Any]) -> Branch:
        branch = self._owned(account=account, branch_id=branch_id)
        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        return self.branches.update(branch, **fields)

    @transaction.atomic
    def delete(self, *, account: Account, branch_id) -> None:
        self.branches.delete(self._owned(account=account, branch_id=branch_id))

    @transaction.atomic
    def toggle_availability(self, *, account: Account, branch_id) -> Branch:
        branch = self._owned(account=account, branch_id=branch_id)
        return self.branches.update(branch, available=not branch.available)

    def find_all(self, query: PaginationQuery) -> PaginatedResult[Branch]:
        qs = self.branches.get_queryset().select_related("provider")
        return self.branches.find_paginated(query.with_search_fields(self.SEARCH_FIELDS), queryset=qs)

    def find_by_id(self, branch_id) -> Branch:
        return self._get(branch_id)

    def metrics(self, *, provider_id: Optional[Any] = None) -> dict[str, int]:
        where = {"provider_id": provider_id} if provider_id else {}
        return {
            "total": self.branches.count(**where),
            "active": self.branches.count(available=True, **where),
            "inactive": self.branches.count(available=False, **where),
        }
