"""
Company Query Engine

Filtering and pagination over the company collection. The pure helpers
(``filter_companies``/``paginate``) define the listing semantics; the
PostgreSQL repository reproduces them in SQL.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

import structlog

from company_review.core.security import Role, authorize
from company_review.schemas.company import (
    CompanyDocumentResponse,
    CompanyListResponse,
    CompanyQuery,
    CompanyResponse,
    Pagination,
)

if TYPE_CHECKING:
    from company_review.repositories.base import CompanyRepository

logger = structlog.get_logger(__name__)


@dataclass
class CompanyPage:
    """A snapshot of one page of companies.

    Decisions applied elsewhere are not reflected until the caller re-queries;
    ``upsert`` merges a single updated record back in place by id.
    """

    items: List[CompanyResponse]
    pagination: Pagination
    query: CompanyQuery = field(default_factory=CompanyQuery)

    @property
    def pending_count(self) -> int:
        return sum(1 for company in self.items if not company.is_verified)

    def upsert(self, company: CompanyResponse) -> bool:
        """Replace the item with the same id; returns False if it is not on this page."""
        for index, existing in enumerate(self.items):
            if existing.id == company.id:
                self.items[index] = company
                return True
        return False

    def to_response(self) -> CompanyListResponse:
        return CompanyListResponse(
            items=list(self.items),
            pagination=self.pagination,
            pending_count=self.pending_count,
        )


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term.lower() in value.lower()


def matches_query(company: CompanyResponse, query: CompanyQuery) -> bool:
    """True when the company satisfies every filter set on the query."""
    if query.verified is not None and company.is_verified != query.verified:
        return False

    if query.search and not (
        _contains(company.name, query.search)
        or _contains(company.description, query.search)
    ):
        return False

    if query.industry and not _contains(company.industry, query.industry):
        return False

    if query.city and not any(_contains(loc.city, query.city) for loc in company.locations):
        return False

    if query.country and not any(
        _contains(loc.country, query.country) for loc in company.locations
    ):
        return False

    return True


def filter_companies(
    companies: Iterable[CompanyResponse], query: CompanyQuery
) -> List[CompanyResponse]:
    """Matching companies, newest first (ties broken by id, descending)."""
    matching = [company for company in companies if matches_query(company, query)]
    matching.sort(key=lambda company: (company.created_at, company.id), reverse=True)
    return matching


def paginate(items: List[CompanyResponse], query: CompanyQuery) -> CompanyPage:
    """Slice ``[(page-1)*limit, page*limit)``; pages past the end are empty."""
    pagination = Pagination.build(page=query.page, limit=query.limit, total=len(items))
    page_items = items[query.offset:query.offset + query.limit]
    return CompanyPage(items=page_items, pagination=pagination, query=query)


def query_companies(companies: Iterable[CompanyResponse], query: CompanyQuery) -> CompanyPage:
    """Filter then paginate an in-memory collection."""
    return paginate(filter_companies(companies, query), query)


# ==================== Entry points ====================

async def list_companies(
    repository: "CompanyRepository",
    query: CompanyQuery,
    role: Union[Role, str],
) -> CompanyPage:
    """List companies for review (ADMIN / SUPER_ADMIN)."""
    authorize(role, "companies:read")

    page = await repository.list_companies(query)

    logger.info(
        "companies_listed",
        filters=query.model_dump(exclude_none=True, exclude={"page", "limit"}),
        page=page.pagination.page,
        limit=page.pagination.limit,
        total=page.pagination.total,
    )
    return page


async def search_public_companies(
    repository: "CompanyRepository",
    query: CompanyQuery,
) -> CompanyPage:
    """Public directory: only verified companies, no role required."""
    public_query = query.model_copy(update={"verified": True})
    return await repository.list_companies(public_query)


async def get_company(
    repository: "CompanyRepository",
    company_id: str,
    role: Union[Role, str],
) -> CompanyResponse:
    authorize(role, "companies:read")
    return await repository.get_company(company_id)


async def get_company_documents(
    repository: "CompanyRepository",
    company_id: str,
    role: Union[Role, str],
) -> List[CompanyDocumentResponse]:
    authorize(role, "documents:read")
    return await repository.get_company_documents(company_id)
