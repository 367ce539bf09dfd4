"""
Review Session

Caller-side state for one reviewer working through a company listing: the
current page snapshot plus a single in-flight guard. Calls made while another
decision or bulk action is pending are dropped, never queued.
"""

from typing import TYPE_CHECKING, Optional, Union

import structlog

from company_review.core.security import Role, coerce_role
from company_review.schemas.company import (
    BulkActionResult,
    BulkCompanyAction,
    CompanyQuery,
    CompanyResponse,
    VerificationDecision,
)
from company_review.services.bulk_actions import process_bulk_action
from company_review.services.company_query import CompanyPage, list_companies
from company_review.services.verification import decide_verification

if TYPE_CHECKING:
    from company_review.repositories.base import CompanyRepository

logger = structlog.get_logger(__name__)


class ReviewSession:
    """Listing snapshot plus decision dispatch for a single reviewer."""

    def __init__(
        self,
        repository: "CompanyRepository",
        role: Union[Role, str],
        query: Optional[CompanyQuery] = None,
    ):
        self.repository = repository
        self.role = coerce_role(role)
        self.query = query or CompanyQuery()
        self.page: Optional[CompanyPage] = None
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    async def refresh(self, query: Optional[CompanyQuery] = None) -> CompanyPage:
        """Re-query and replace the snapshot."""
        if query is not None:
            self.query = query
        self.page = await list_companies(self.repository, self.query, self.role)
        return self.page

    async def decide(
        self, company_id: str, decision: VerificationDecision
    ) -> Optional[CompanyResponse]:
        """Apply a single decision and merge the result into the snapshot.

        Returns None without side effects if another call is still pending.
        """
        if self._in_flight:
            logger.info("review_call_ignored", company_id=company_id, reason="in_flight")
            return None

        self._in_flight = True
        try:
            company = await decide_verification(
                self.repository, company_id, decision, self.role
            )
            if self.page is not None:
                self.page.upsert(company)
            return company
        finally:
            self._in_flight = False

    async def bulk(self, bulk_action: BulkCompanyAction) -> Optional[BulkActionResult]:
        """Apply a bulk action, then re-query (many rows may have changed)."""
        if self._in_flight:
            logger.info("review_call_ignored", action=bulk_action.action.value, reason="in_flight")
            return None

        self._in_flight = True
        try:
            result = await process_bulk_action(self.repository, bulk_action, self.role)
            await self.refresh()
            return result
        finally:
            self._in_flight = False
