"""PostgreSQL company store (async SQLAlchemy)."""

import asyncio
import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from company_review.core.exceptions import NotFoundError, PersistenceError
from company_review.models.company import Company, CompanyLocation
from company_review.models.company_document import CompanyDocument
from company_review.repositories.base import CompanyRepository
from company_review.schemas.company import (
    CompanyDocumentResponse,
    CompanyQuery,
    CompanyResponse,
    Pagination,
    VerificationDecision,
)
from company_review.services.company_query import CompanyPage

logger = logging.getLogger(__name__)


def _parse_id(company_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(company_id))
    except (TypeError, ValueError):
        return None


def _build_filters(query: CompanyQuery) -> list:
    """SQL rendition of ``services.company_query.matches_query``.

    ``icontains(..., autoescape=True)`` keeps ``%`` and ``_`` in the term literal.
    """
    filters = []

    if query.verified is not None:
        filters.append(Company.is_verified.is_(query.verified))

    if query.search:
        filters.append(or_(
            Company.name.icontains(query.search, autoescape=True),
            Company.description.icontains(query.search, autoescape=True),
        ))

    if query.industry:
        filters.append(Company.industry.icontains(query.industry, autoescape=True))

    # Any location may match
    if query.city:
        filters.append(Company.locations.any(
            CompanyLocation.city.icontains(query.city, autoescape=True)
        ))

    if query.country:
        filters.append(Company.locations.any(
            CompanyLocation.country.icontains(query.country, autoescape=True)
        ))

    return filters


class SQLAlchemyCompanyRepository(CompanyRepository):
    """Company store over one request-scoped AsyncSession.

    Every failed statement rolls the session back before raising, so a bulk
    action sharing the session can carry on with the next company.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, statement, error_message: str):
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(error_message) from e

    async def _load(self, company_id: str) -> Company:
        parsed_id = _parse_id(company_id)
        company = None
        if parsed_id is not None:
            result = await self._execute(
                select(Company).where(Company.id == parsed_id),
                f"Failed to load company {company_id}",
            )
            company = result.scalar_one_or_none()

        if company is None:
            raise NotFoundError(f"Company {company_id} not found", company_id=str(company_id))
        return company

    async def list_companies(self, query: CompanyQuery) -> CompanyPage:
        filters = _build_filters(query)

        count_query = select(func.count()).select_from(Company).where(*filters)
        list_query = (
            select(Company)
            .where(*filters)
            .order_by(desc(Company.created_at), desc(Company.id))
            .offset(query.offset)
            .limit(query.limit)
        )

        total = (await self._execute(count_query, "Failed to count companies")).scalar() or 0
        companies = (await self._execute(list_query, "Failed to list companies")).scalars().all()

        return CompanyPage(
            items=[CompanyResponse.model_validate(company) for company in companies],
            pagination=Pagination.build(page=query.page, limit=query.limit, total=total),
            query=query,
        )

    async def get_company(self, company_id: str) -> CompanyResponse:
        company = await self._load(company_id)
        return CompanyResponse.model_validate(company)

    async def get_company_documents(self, company_id: str) -> List[CompanyDocumentResponse]:
        company = await self._load(company_id)

        result = await self._execute(
            select(CompanyDocument)
            .where(CompanyDocument.company_id == company.id)
            .order_by(CompanyDocument.uploaded_at),
            f"Failed to load documents for company {company_id}",
        )
        return [CompanyDocumentResponse.model_validate(doc) for doc in result.scalars().all()]

    async def decide_verification(
        self, company_id: str, decision: VerificationDecision
    ) -> CompanyResponse:
        company = await self._load(company_id)

        try:
            company.is_verified = decision.is_approved
            # expire_on_commit=False keeps the loaded row (and its locations) usable
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to save decision for company {company_id}") from e
        except asyncio.CancelledError:
            # Caller navigated away: leave nothing half-written
            await self.session.rollback()
            raise

        logger.info(f"Company {company.id} is_verified set to {company.is_verified}")
        return CompanyResponse.model_validate(company)
