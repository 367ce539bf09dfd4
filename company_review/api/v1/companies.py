"""
Company Verification API
- SuperAdmin/Admin: list, inspect documents, approve/reject, bulk actions
- Public: search verified companies
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from company_review.api.deps import get_company_repository, require_reviewer_role
from company_review.core.security import Role
from company_review.repositories import CompanyRepository
from company_review.schemas.company import (
    BulkActionResult,
    BulkCompanyAction,
    CompanyComplianceResponse,
    CompanyDocumentResponse,
    CompanyListResponse,
    CompanyQuery,
    CompanyResponse,
    VerificationDecision,
)
from company_review.services import company_query
from company_review.services.bulk_actions import process_bulk_action
from company_review.services.compliance import load_company_compliance
from company_review.services.verification import decide_verification

router = APIRouter()


def build_query(
    search: Optional[str] = Query(None, description="Search in company name or description"),
    verified: Optional[bool] = Query(None, description="Filter by verification status (omit for all)"),
    industry: Optional[str] = Query(None, description="Industry (case-insensitive, partial match)"),
    city: Optional[str] = Query(None, description="City of any location (partial match)"),
    country: Optional[str] = Query(None, description="Country of any location (partial match)"),
    page: Optional[int] = Query(None, description="Page number (starts at 1)"),
    limit: Optional[int] = Query(None, description="Items per page (default 10)"),
) -> CompanyQuery:
    return CompanyQuery(
        search=search,
        verified=verified,
        industry=industry,
        city=city,
        country=country,
        page=page,
        limit=limit,
    )


# ==================== Review (Admin) ====================

@router.get("", response_model=CompanyListResponse)
async def list_companies(
    query: CompanyQuery = Depends(build_query),
    role: Role = Depends(require_reviewer_role),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """
    List companies for verification review

    **RBAC**: SuperAdmin, Admin

    **Filters** (combined with AND):
    - `search`: company name or description contains the term
    - `verified`: true / false; omit for all
    - `industry`, `city`, `country`: case-insensitive partial match

    **Pagination:**
    - `page` (default 1) and `limit` (default 10); non-positive values use the defaults
    - a page past the last one returns no items
    """
    page = await company_query.list_companies(repository, query, role)
    return page.to_response()


@router.get("/public/search", response_model=CompanyListResponse)
async def search_public_companies(
    query: CompanyQuery = Depends(build_query),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """Public company directory (verified companies only, no authentication)."""
    page = await company_query.search_public_companies(repository, query)
    return page.to_response()


@router.post("/bulk-action", response_model=BulkActionResult)
async def bulk_company_action(
    bulk_action: BulkCompanyAction,
    role: Role = Depends(require_reviewer_role),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """
    Approve or reject many companies at once (SuperAdmin/Admin)

    Companies that fail (unknown id, storage error) are reported in `errors`;
    the rest of the batch still runs.
    """
    return await process_bulk_action(repository, bulk_action, role)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    role: Role = Depends(require_reviewer_role),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """Get company details by ID."""
    return await company_query.get_company(repository, company_id, role)


@router.get("/{company_id}/documents", response_model=List[CompanyDocumentResponse])
async def get_company_documents(
    company_id: str,
    role: Role = Depends(require_reviewer_role),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """Get documents uploaded by a company."""
    return await company_query.get_company_documents(repository, company_id, role)


@router.get("/{company_id}/compliance", response_model=CompanyComplianceResponse)
async def get_company_compliance(
    company_id: str,
    role: Role = Depends(require_reviewer_role),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """
    Company, labelled documents and derived compliance status

    Status is one of VERIFIED, INCOMPLETE, PENDING_REVIEW, NON_COMPLIANT.
    It is for display only and never changes `is_verified`.
    """
    return await load_company_compliance(repository, company_id, role)


@router.patch("/{company_id}/verify", response_model=CompanyResponse)
async def verify_company(
    company_id: str,
    decision: VerificationDecision,
    role: Role = Depends(require_reviewer_role),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """
    Approve or reject a company (SuperAdmin/Admin)

    Rejections require `notes`.
    """
    return await decide_verification(repository, company_id, decision, role)
