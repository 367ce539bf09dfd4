"""
Company Repository Interface
Persistence collaborator for the verification services (PostgreSQL, in-memory)
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from company_review.schemas.company import (
    CompanyDocumentResponse,
    CompanyQuery,
    CompanyResponse,
    VerificationDecision,
)

if TYPE_CHECKING:
    from company_review.services.company_query import CompanyPage


class CompanyRepository(ABC):
    """Base class for all company stores"""

    @abstractmethod
    async def list_companies(self, query: CompanyQuery) -> "CompanyPage":
        """
        Filtered, newest-first, paginated companies

        Returns:
            CompanyPage with the page items and pagination metadata
        """
        pass

    @abstractmethod
    async def get_company(self, company_id: str) -> CompanyResponse:
        """
        Raises:
            NotFoundError: unknown company id
        """
        pass

    @abstractmethod
    async def get_company_documents(self, company_id: str) -> List[CompanyDocumentResponse]:
        """
        Documents uploaded by the company, oldest first

        Raises:
            NotFoundError: unknown company id
        """
        pass

    @abstractmethod
    async def decide_verification(
        self, company_id: str, decision: VerificationDecision
    ) -> CompanyResponse:
        """
        Persist ``is_verified = decision.is_approved`` as one atomic write

        Raises:
            NotFoundError: unknown company id
            PersistenceError: write failed; nothing was committed
        """
        pass
