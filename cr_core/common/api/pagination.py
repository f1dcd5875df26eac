from __future__ import annotations

import json
from typing import Iterable

from rest_framework import serializers

from cr_core.common.repository import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginatedResult,
    PaginationQuery,
    parse_bracket_filters,
)


class PaginationParamsSerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, required=False, default=DEFAULT_PAGE)
    pageSize = serializers.IntegerField(
        min_value=1, max_value=MAX_PAGE_SIZE, required=False, default=DEFAULT_PAGE_SIZE
    )
    search = serializers.CharField(required=False, allow_blank=True)
    orderBy = serializers.CharField(required=False, allow_blank=True)


def _plain_filter_by(params) -> dict:
    """
    filterBy may arrive as a JSON object (?filterBy={"available":true}).
    Anything that isn't a JSON object is treated as empty.
    """
    raw = params.get("filterBy")
    if not raw:
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _search_fields(params) -> tuple[str, ...]:
    if hasattr(params, "getlist"):
        values = params.getlist("searchFields") or params.getlist("searchFields[]")
    else:
        values = params.get("searchFields") or []
        if isinstance(values, str):
            values = [values]

    out: list[str] = []
    for v in values:
        out.extend(p.strip() for p in str(v).split(",") if p.strip())
    return tuple(out)


def pagination_query(request, *, search_fields: Iterable[str] = ()) -> PaginationQuery:
    """
    Build a PaginationQuery from request query params.
      page, pageSize (alias page_size), search, orderBy (alias ordering),
      searchFields, filterBy (JSON) or filterBy[field]=value
    """
    params = request.query_params

    raw = {
        "page": params.get("page"),
        "pageSize": params.get("pageSize") or params.get("page_size"),
        "search": params.get("search"),
        "orderBy": params.get("orderBy") or params.get("ordering"),
    }
    ser = PaginationParamsSerializer(data={k: v for k, v in raw.items() if v not in (None, "")})
    ser.is_valid(raise_exception=True)
    data = ser.validated_data

    filter_by = _plain_filter_by(params)
    if not filter_by:
        filter_by = parse_bracket_filters(params)

    query = PaginationQuery(
        page=data["page"],
        page_size=data["pageSize"],
        search=data.get("search") or None,
        filter_by=filter_by,
        order_by=data.get("orderBy") or None,
        search_fields=_search_fields(params),
    )
    return query.with_search_fields(search_fields)


def paginated_payload(result: PaginatedResult, serializer_class) -> dict:
    return result.to_dict(serializer_class)
