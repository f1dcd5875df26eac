# cr_core/common/tests/test_repository.py
import math

import pytest

from cr_core.common.repository import (
    DEFAULT_ORDERING,
    PaginationQuery,
    Repository,
    coerce_filters,
    coerce_value,
    parse_bracket_filters,
)
from cr_core.iam.models import Role
from cr_core.providers.models import Provider


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("TRUE", True),
        ("False", False),
        ("42", 42),
        ("-7", -7),
        ("4.5", 4.5),
        ("abc", "abc"),
        ("", ""),
        (3, 3),
    ],
)
def test_coerce_value(raw, expected):
    out = coerce_value(raw)
    assert out == expected
    assert type(out) is type(expected)


def test_coerce_filters_never_rejects():
    assert coerce_filters({"available": "true", "name": "Clinic 1", "count": "3"}) == {
        "available": True,
        "name": "Clinic 1",
        "count": 3,
    }
    assert coerce_filters(None) == {}


def test_parse_bracket_filters_ignores_other_keys():
    params = {"filterBy[available]": "true", "filterBy[type]": ["a", "clinic"], "page": "2"}
    assert parse_bracket_filters(params) == {"available": "true", "type": "clinic"}


@pytest.mark.parametrize("page, page_size", [(0, 10), (1, 0), (-1, 5)])
def test_pagination_query_rejects_bounds(page, page_size):
    with pytest.raises(ValueError):
        PaginationQuery(page=page, page_size=page_size)


def test_pagination_query_skip_take():
    q = PaginationQuery(page=3, page_size=20)
    assert q.skip == 40
    assert q.take == 20


def test_with_search_fields_only_fills_when_searching():
    assert PaginationQuery().with_search_fields(["name"]).search_fields == ()
    assert PaginationQuery(search="x").with_search_fields(["name"]).search_fields == ("name",)
    explicit = PaginationQuery(search="x", search_fields=("address",))
    assert explicit.with_search_fields(["name"]).search_fields == ("address",)


@pytest.mark.django_db
class TestRepository:
    @pytest.fixture
    def providers(self, make_account):
        rows = []
        for i in range(7):
            account = make_account(Role.PROVIDER)
            rows.append(
                Provider.objects.create(
                    account=account,
                    name=f"Clinic {i}",
                    address="Lagos" if i % 2 else "Abuja",
                    available=i < 5,
                )
            )
        return rows

    @pytest.fixture
    def repo(self):
        return Repository(Provider)

    def test_find_by_id_invalid_id_is_none(self, repo):
        assert repo.find_by_id("not-a-uuid") is None
        assert repo.find_by_id(None) is None

    @pytest.mark.parametrize("page, page_size", [(1, 1), (1, 3), (2, 3), (3, 3), (4, 3), (1, 10)])
    def test_total_pages_and_page_size(self, repo, providers, page, page_size):
        result = repo.find_paginated(PaginationQuery(page=page, page_size=page_size))
        assert result.total == 7
        assert result.total_pages == math.ceil(7 / page_size)
        assert len(result.data) <= page_size

    def test_empty_table_has_zero_pages(self, repo):
        result = repo.find_paginated(PaginationQuery())
        assert result.total == 0
        assert result.total_pages == 0
        assert result.data == []

    def test_to_dict_shape(self, repo, providers):
        out = repo.find_paginated(PaginationQuery(page=2, page_size=5)).to_dict()
        assert set(out) == {"data", "total", "page", "pageSize", "totalPages"}
        assert out["page"] == 2
        assert out["pageSize"] == 5
        assert out["totalPages"] == 2
        assert len(out["data"]) == 2

    def test_filter_coerces_and_ignores_unknown_keys(self, repo, providers):
        result = repo.find_paginated(
            PaginationQuery(page_size=50, filter_by={"available": "false", "bogus": "1"})
        )
        assert result.total == 2
        assert all(p.available is False for p in result.data)

    def test_search_is_or_across_fields(self, repo, providers):
        result = repo.find_paginated(
            PaginationQuery(page_size=50, search="lagos", search_fields=("name", "address"))
        )
        assert result.total == 3

        by_name = repo.find_paginated(
            PaginationQuery(page_size=50, search="clinic 6", search_fields=("name", "address"))
        )
        assert [p.name for p in by_name.data] == ["Clinic 6"]

    def test_search_without_fields_is_ignored(self, repo, providers):
        assert repo.find_paginated(PaginationQuery(search="nothing-matches")).total == 7

    def test_explicit_default_ordering_matches_default(self, repo, providers):
        default = repo.find_paginated(PaginationQuery(page_size=50))
        explicit = repo.find_paginated(PaginationQuery(page_size=50, order_by=DEFAULT_ORDERING))
        assert [p.pk for p in default.data] == [p.pk for p in explicit.data]

    def test_unknown_order_field_falls_back(self, repo, providers):
        default = repo.find_paginated(PaginationQuery(page_size=50))
        unknown = repo.find_paginated(PaginationQuery(page_size=50, order_by="-nope"))
        assert [p.pk for p in default.data] == [p.pk for p in unknown.data]

    def test_ascending_order(self, repo, providers):
        result = repo.find_paginated(PaginationQuery(page_size=50, order_by="name"))
        names = [p.name for p in result.data]
        assert names == sorted(names)

    def test_upsert_creates_then_updates(self, repo, make_account):
        account = make_account(Role.PROVIDER)
        created = repo.upsert(lookup={"account": account}, create={"name": "A"}, update={"name": "A"})
        updated = repo.upsert(lookup={"account": account}, create={"name": "B"}, update={"name": "B"})
        assert created.pk == updated.pk
        assert repo.count(account=account) == 1
        assert repo.find_by_id(created.pk).name == "B"

    def test_count_by(self, repo, providers):
        assert repo.count_by("available", [True, False]) == {True: 5, False: 2}

    def test_search_only_uses_text_columns(self, repo, providers):
        result = repo.find_paginated(
            PaginationQuery(page_size=50, search="clinic 6", search_fields=("account", "available", "name"))
        )
        assert [p.name for p in result.data] == ["Clinic 6"]

    def test_search_on_non_text_columns_alone_matches_everything(self, repo, providers):
        result = repo.find_paginated(
            PaginationQuery(page_size=50, search="x", search_fields=("account", "account_id"))
        )
        assert result.total == 7

    def test_unparseable_filter_values_are_dropped(self, repo, providers):
        result = repo.find_paginated(
            PaginationQuery(
                page_size=50,
                filter_by={"created_at": "abc", "account_id": "not-a-uuid", "available": "false"},
            )
        )
        assert result.total == 2

    def test_text_filter_keeps_raw_string(self, repo, providers):
        providers[0].phone_number = "08012345678"
        providers[0].save()

        result = repo.find_paginated(PaginationQuery(filter_by={"phone_number": "08012345678"}))
        assert [p.pk for p in result.data] == [providers[0].pk]

    def test_clean_filters(self, repo):
        assert repo.clean_filters(
            {"phone_number": "0801", "available": "true", "created_at": "abc", "bogus": "1"}
        ) == {"phone_number": "0801", "available": True}
