"""
In-memory company store
Development/test alternative to PostgreSQL with the same listing semantics
"""

import logging
from typing import Dict, Iterable, List, Optional

from company_review.core.exceptions import NotFoundError
from company_review.repositories.base import CompanyRepository
from company_review.schemas.company import (
    CompanyDocumentResponse,
    CompanyQuery,
    CompanyResponse,
    VerificationDecision,
)
from company_review.services.company_query import CompanyPage, query_companies

logger = logging.getLogger(__name__)


class InMemoryCompanyRepository(CompanyRepository):
    """
    Dict-backed store keyed by company id.
    Records are immutable pydantic models; updates swap in a copy.
    """

    def __init__(
        self,
        companies: Optional[Iterable[CompanyResponse]] = None,
        documents: Optional[Iterable[CompanyDocumentResponse]] = None,
    ):
        self._companies: Dict[str, CompanyResponse] = {}
        self._documents: Dict[str, List[CompanyDocumentResponse]] = {}

        for company in companies or []:
            self.add_company(company)
        for document in documents or []:
            self.add_document(document)

    def add_company(self, company: CompanyResponse) -> None:
        self._companies[company.id] = company
        self._documents.setdefault(company.id, [])

    def add_document(self, document: CompanyDocumentResponse) -> None:
        if document.company_id not in self._companies:
            raise NotFoundError(f"Company {document.company_id} not found", company_id=document.company_id)
        self._documents[document.company_id].append(document)

    def _require(self, company_id: str) -> CompanyResponse:
        company = self._companies.get(str(company_id))
        if company is None:
            raise NotFoundError(f"Company {company_id} not found", company_id=str(company_id))
        return company

    async def list_companies(self, query: CompanyQuery) -> CompanyPage:
        return query_companies(self._companies.values(), query)

    async def get_company(self, company_id: str) -> CompanyResponse:
        return self._require(company_id)

    async def get_company_documents(self, company_id: str) -> List[CompanyDocumentResponse]:
        company = self._require(company_id)
        return sorted(self._documents[company.id], key=lambda doc: doc.uploaded_at)

    async def decide_verification(
        self, company_id: str, decision: VerificationDecision
    ) -> CompanyResponse:
        company = self._require(company_id)
        updated = company.model_copy(update={"is_verified": decision.is_approved})
        self._companies[company.id] = updated
        logger.debug(f"Company {company.id} is_verified={updated.is_verified}")
        return updated
