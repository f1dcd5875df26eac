# cr_core/common/repository.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Mapping, Optional, TypeVar

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models
from django.db.models import Q, QuerySet

M = TypeVar("M", bound=models.Model)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 200
DEFAULT_ORDERING = "-created_at"

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_BRACKET_RE = re.compile(r"^filterBy\[([^\]]+)\]$")


def coerce_value(value: Any) -> Any:
    """
    Best-effort scalar coercion for query-string filter values.
      "true"/"false" -> bool, "42" -> 42, "4.5" -> 4.5, anything else unchanged.
    """
    if not isinstance(value, str):
        return value

    raw = value.strip()
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.match(raw):
        return int(raw)
    if _FLOAT_RE.match(raw):
        try:
            return float(raw)
        except ValueError:
            return value
    return value


def coerce_filters(filters: Mapping[str, Any] | None) -> dict[str, Any]:
    return {str(k): coerce_value(v) for k, v in (filters or {}).items()}


def parse_bracket_filters(params: Mapping[str, Any]) -> dict[str, Any]:
    """
    Rebuild a filter mapping from flattened query keys:
      ?filterBy[available]=true&filterBy[type]=clinic -> {"available": "true", "type": "clinic"}
    """
    out: dict[str, Any] = {}
    for key in params.keys():
        m = _BRACKET_RE.match(str(key))
        if not m:
            continue
        value = params.get(key)
        # QueryDict.get returns the last value; plain dicts may hold lists
        if isinstance(value, (list, tuple)):
            value = value[-1] if value else None
        out[m.group(1).strip()] = value
    return out


@dataclass(frozen=True)
class PaginationQuery:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    search: Optional[str] = None
    filter_by: Mapping[str, Any] = field(default_factory=dict)
    order_by: Optional[str] = None
    search_fields: tuple[str, ...] = ()

    def __post_init__(self):
        if int(self.page) < 1:
            raise ValueError("page must be >= 1")
        if int(self.page_size) < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size

    def with_search_fields(self, fields: Iterable[str]) -> "PaginationQuery":
        """Fill in default search fields when the caller searched without naming any."""
        if self.search_fields or not self.search:
            return self
        return PaginationQuery(
            page=self.page,
            page_size=self.page_size,
            search=self.search,
            filter_by=self.filter_by,
            order_by=self.order_by,
            search_fields=tuple(fields),
        )


@dataclass(frozen=True)
class PaginatedResult(Generic[M]):
    data: list
    total: int
    page: int
    page_size: int
    total_pages: int

    def to_dict(self, serializer_class=None) -> dict[str, Any]:
        data = serializer_class(self.data, many=True).data if serializer_class else self.data
        return {
            "data": data,
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
        }


class Repository(Generic[M]):
    """
    Thin data-access wrapper around one model.
    Services receive repositories through their constructor and never touch
    Model.objects directly.
    """

    def __init__(self, model: type[M], *, extra_fields: Iterable[str] = ()):
        self.model = model
        # related lookups (e.g. "user__email") that may be filtered/searched/sorted on
        self.extra_fields = tuple(extra_fields)

    def __repr__(self) -> str:
        return f"Repository({self.model.__name__})"

    # ------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------
    def get_queryset(self) -> QuerySet[M]:
        return self.model._default_manager.all()

    def model_fields(self) -> dict[str, models.Field]:
        """Concrete fields keyed by both name and attname ('provider' and 'provider_id')."""
        out: dict[str, models.Field] = {}
        for f in self.model._meta.concrete_fields:
            out[f.name] = f
            out[f.attname] = f
        return out

    def field_names(self) -> set[str]:
        names = set(self.model_fields())
        names.update(self.extra_fields)
        return names

    def text_field_names(self) -> set[str]:
        # only these accept __icontains; extra_fields are declared as text lookups
        names = {
            name for name, f in self.model_fields().items()
            if isinstance(f, (models.CharField, models.TextField))
        }
        names.update(self.extra_fields)
        return names

    def clean_filters(self, filter_by: Mapping[str, Any] | None) -> dict[str, Any]:
        """
        Keep the filterBy entries this model can answer.
        Unknown keys and values the column cannot parse are dropped, not rejected.
        Text columns get the raw string so "0801..." keeps its leading zero.
        """
        fields = self.model_fields()
        out: dict[str, Any] = {}
        for key, raw in (filter_by or {}).items():
            key = str(key)
            if key in self.extra_fields:
                out[key] = coerce_value(raw)
                continue

            f = fields.get(key)
            if f is None:
                continue

            if isinstance(f, (models.CharField, models.TextField)):
                value = raw if isinstance(raw, str) else str(raw)
            else:
                value = coerce_value(raw)

            try:
                f.to_python(value)
            except (DjangoValidationError, ValueError, TypeError):
                continue
            out[key] = value
        return out

    # ------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------
    def find_by_id(self, pk) -> Optional[M]:
        try:
            return self.get_queryset().get(pk=pk)
        except (self.model.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            return None

    def find_one(self, **filters) -> Optional[M]:
        try:
            return self.get_queryset().filter(**filters).first()
        except (DjangoValidationError, ValueError):
            return None

    def find_all(self, **filters) -> QuerySet[M]:
        return self.get_queryset().filter(**filters)

    def create(self, **data) -> M:
        return self.model._default_manager.create(**data)

    def update(self, obj: M, **data) -> M:
        for k, v in data.items():
            setattr(obj, k, v)
        obj.save()
        return obj

    def delete(self, obj: M) -> None:
        obj.delete()

    def upsert(self, *, lookup: Mapping[str, Any], create: Mapping[str, Any], update: Mapping[str, Any]) -> M:
        obj = self.find_one(**lookup)
        if obj is not None:
            return self.update(obj, **dict(update))
        return self.create(**{**dict(lookup), **dict(create)})

    def count(self, **filters) -> int:
        return self.get_queryset().filter(**filters).count()

    def count_by(self, field_name: str, values: Iterable[Any], **filters) -> dict[Any, int]:
        """One counted query per value; keeps metrics consistent across resources."""
        base = self.get_queryset().filter(**filters)
        return {v: base.filter(**{field_name: v}).count() for v in values}

    # ------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------
    def build_queryset(self, query: PaginationQuery, *, queryset: QuerySet[M] | None = None) -> QuerySet[M]:
        qs = queryset if queryset is not None else self.get_queryset()
        filters = self.clean_filters(query.filter_by)
        if filters:
            qs = qs.filter(**filters)

        search = (query.search or "").strip()
        searchable = self.text_field_names()
        search_fields = [f for f in query.search_fields if f in searchable]
        if search and search_fields:
            clause = Q()
            for f in search_fields:
                clause |= Q(**{f"{f}__icontains": search})
            qs = qs.filter(clause)

        return qs.order_by(self._ordering(query.order_by, self.field_names()))

    def _ordering(self, order_by: str | None, allowed: set[str]) -> str:
        if not order_by:
            return DEFAULT_ORDERING
        name = order_by[1:] if order_by.startswith("-") else order_by
        if name not in allowed:
            return DEFAULT_ORDERING
        return order_by

    def find_paginated(self, query: PaginationQuery, *, queryset: QuerySet[M] | None = None) -> PaginatedResult[M]:
        qs = self.build_queryset(query, queryset=queryset)

        # count and slice are separate round-trips
        total = qs.count()
        data = list(qs[query.skip:query.skip + query.take])

        return PaginatedResult(
            data=data,
            total=total,
            page=query.page,
            page_size=query.page_size,
            total_pages=math.ceil(total / query.page_size),
        )
