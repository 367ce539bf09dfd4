"""
Tests for company_query.py - filtering, pagination and page snapshots
"""
import math
from datetime import datetime, timezone

import pytest

from company_review.core.exceptions import AuthorizationError, NotFoundError
from company_review.schemas.company import CompanyQuery, Pagination
from company_review.services.company_query import (
    filter_companies,
    get_company,
    list_companies,
    matches_query,
    query_companies,
    search_public_companies,
)

BASE_TIME = datetime(2026, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def catalogue(make_company):
    return [
        make_company("Acme Robotics", industry="Manufacturing", city="Pune", country="India"),
        make_company("Globex", industry="Technology", city="Berlin", country="Germany", is_verified=True),
        make_company(
            "Initech",
            industry="Software",
            city="Austin",
            country="USA",
            description="Enterprise acme tooling",
            extra_locations=[("Bengaluru", "India")],
        ),
        make_company("Umbrella", industry="Pharma", city="Mumbai", country="India", is_verified=True),
    ]


def names(companies):
    return [company.name for company in companies]


# ---------------------------------------------------------------------------
# Query normalisation
# ---------------------------------------------------------------------------

class TestCompanyQuery:

    def test_defaults(self):
        query = CompanyQuery()
        assert (query.page, query.limit) == (1, 10)
        assert query.verified is None

    @pytest.mark.parametrize("limit", [0, -5, None, "abc"])
    def test_invalid_limit_falls_back_to_default(self, limit):
        assert CompanyQuery(limit=limit).limit == 10

    @pytest.mark.parametrize("page", [0, -1, None])
    def test_invalid_page_falls_back_to_first(self, page):
        assert CompanyQuery(page=page).page == 1

    def test_blank_strings_are_unset(self):
        query = CompanyQuery(search="  ", industry="", city=" ", country="")
        assert query.search is None
        assert query.industry is None
        assert query.city is None
        assert query.country is None

    def test_offset(self):
        assert CompanyQuery(page=3, limit=7).offset == 14


class TestPagination:

    @pytest.mark.parametrize("total,limit", [(0, 10), (1, 10), (10, 10), (11, 10), (15, 10), (99, 7)])
    def test_total_pages_is_ceiling(self, total, limit):
        assert Pagination.build(page=1, limit=limit, total=total).total_pages == math.ceil(total / limit)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestFiltering:

    def test_no_filters_returns_all_newest_first(self, catalogue):
        result = filter_companies(catalogue, CompanyQuery())
        assert names(result) == ["Umbrella", "Initech", "Globex", "Acme Robotics"]

    def test_equal_timestamps_ordered_by_id_descending(self, make_company):
        first = make_company("First").model_copy(update={"id": "a-company", "created_at": BASE_TIME})
        second = make_company("Second").model_copy(update={"id": "b-company", "created_at": BASE_TIME})

        assert names(filter_companies([first, second], CompanyQuery())) == ["Second", "First"]
        assert names(filter_companies([second, first], CompanyQuery())) == ["Second", "First"]

    def test_search_treats_like_wildcards_literally(self, make_company):
        companies = [make_company("Acme"), make_company("100% Organic")]
        assert names(filter_companies(companies, CompanyQuery(search="_"))) == []
        assert names(filter_companies(companies, CompanyQuery(search="%"))) == ["100% Organic"]

    def test_search_matches_name_case_insensitive(self, catalogue):
        assert names(filter_companies(catalogue, CompanyQuery(search="GLOBEX"))) == ["Globex"]

    def test_search_matches_description(self, catalogue):
        result = filter_companies(catalogue, CompanyQuery(search="acme"))
        assert names(result) == ["Initech", "Acme Robotics"]

    def test_verified_tri_state(self, catalogue):
        assert names(filter_companies(catalogue, CompanyQuery(verified=True))) == ["Umbrella", "Globex"]
        assert names(filter_companies(catalogue, CompanyQuery(verified=False))) == ["Initech", "Acme Robotics"]
        assert len(filter_companies(catalogue, CompanyQuery(verified=None))) == 4

    def test_industry_substring(self, catalogue):
        assert names(filter_companies(catalogue, CompanyQuery(industry="tech"))) == ["Globex"]

    def test_city_matches_any_location(self, catalogue):
        assert names(filter_companies(catalogue, CompanyQuery(city="bengal"))) == ["Initech"]

    def test_country_substring(self, catalogue):
        result = filter_companies(catalogue, CompanyQuery(country="india"))
        assert names(result) == ["Umbrella", "Initech", "Acme Robotics"]

    def test_filters_combine_with_and(self, catalogue):
        query = CompanyQuery(country="India", verified=False, search="robot")
        assert names(filter_companies(catalogue, query)) == ["Acme Robotics"]

    def test_company_without_locations_never_matches_city(self, make_company):
        company = make_company().model_copy(update={"locations": []})
        assert not matches_query(company, CompanyQuery(city="Pune"))
        assert matches_query(company, CompanyQuery())


# ---------------------------------------------------------------------------
# Pagination of results
# ---------------------------------------------------------------------------

class TestQueryCompanies:

    def test_second_page_of_fifteen_verified(self, make_company):
        companies = [make_company(f"Verified {i}", is_verified=True) for i in range(15)]
        companies += [make_company(f"Unverified {i}") for i in range(4)]

        page = query_companies(companies, CompanyQuery(verified=True, page=2, limit=10))

        assert len(page.items) == 5
        assert page.pagination.total == 15
        assert page.pagination.total_pages == 2
        assert page.pagination.page == 2
        assert all(company.is_verified for company in page.items)

    def test_page_beyond_last_is_empty(self, catalogue):
        page = query_companies(catalogue, CompanyQuery(page=5, limit=2))
        assert page.items == []
        assert page.pagination.total_pages == 2

    @pytest.mark.parametrize("limit", [1, 3, 4, 10])
    def test_item_count_never_exceeds_limit(self, catalogue, limit):
        for page_number in range(1, 6):
            page = query_companies(catalogue, CompanyQuery(page=page_number, limit=limit))
            assert len(page.items) <= limit
            assert page.pagination.total_pages == math.ceil(4 / limit)

    def test_pages_partition_the_result(self, catalogue):
        first = query_companies(catalogue, CompanyQuery(page=1, limit=3))
        second = query_companies(catalogue, CompanyQuery(page=2, limit=3))
        assert names(first.items) + names(second.items) == names(filter_companies(catalogue, CompanyQuery()))

    def test_pending_count(self, catalogue):
        page = query_companies(catalogue, CompanyQuery())
        assert page.pending_count == 2
        assert page.to_response().pending_count == 2


class TestCompanyPageUpsert:

    def test_replaces_in_place(self, catalogue):
        page = query_companies(catalogue, CompanyQuery())
        target = page.items[1]

        assert page.upsert(target.model_copy(update={"is_verified": True}))
        assert page.items[1].id == target.id
        assert page.items[1].is_verified is True
        assert len(page.items) == 4

    def test_unknown_company_is_not_added(self, catalogue, make_company):
        page = query_companies(catalogue, CompanyQuery())
        assert page.upsert(make_company("Stranger")) is False
        assert len(page.items) == 4


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

class TestEntryPoints:

    async def test_list_companies_for_admin(self, repository, catalogue):
        for company in catalogue:
            repository.add_company(company)

        page = await list_companies(repository, CompanyQuery(limit=2), "ADMIN")

        assert names(page.items) == ["Umbrella", "Initech"]
        assert page.pagination.total_pages == 2

    @pytest.mark.parametrize("role", ["EMPLOYER", "STUDENT", "nobody"])
    async def test_list_companies_rejects_other_roles(self, repository, role):
        with pytest.raises(AuthorizationError):
            await list_companies(repository, CompanyQuery(), role)

    async def test_public_search_only_returns_verified(self, repository, catalogue):
        for company in catalogue:
            repository.add_company(company)

        page = await search_public_companies(repository, CompanyQuery(verified=False))

        assert names(page.items) == ["Umbrella", "Globex"]

    async def test_get_company(self, repository, catalogue):
        repository.add_company(catalogue[0])
        company = await get_company(repository, catalogue[0].id, "SUPER_ADMIN")
        assert company.name == "Acme Robotics"
        assert company.primary_location.city == "Pune"

    async def test_get_unknown_company(self, repository):
        with pytest.raises(NotFoundError):
            await get_company(repository, "does-not-exist", "ADMIN")
