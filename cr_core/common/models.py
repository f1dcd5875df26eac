# cr_core/common/models.py
from __future__ import annotations

import uuid

from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UUIDModel(TimeStampedModel):
    """
    Base for every domain row: UUID identity + timestamps.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TrackedModel(UUIDModel):
    """
    Clinical records handed to patients carry a human-friendly tracking code.
    Subclasses set TRACKING_PREFIX.
    """
    TRACKING_PREFIX = "TRK"

    tracking_id = models.CharField(max_length=32, unique=True, editable=False)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self.tracking_id:
            from cr_core.common.tracking import generate_tracking_id

            self.tracking_id = generate_tracking_id(self.TRACKING_PREFIX)
        super().save(*args, **kwargs)
