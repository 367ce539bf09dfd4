"""
Verification Decision Engine

Applies one approve/reject decision to one company. Validation and the role
check run before the repository is touched.
"""

from typing import TYPE_CHECKING, Union

import structlog

from company_review.core.exceptions import ValidationError
from company_review.core.security import Role, authorize
from company_review.schemas.company import CompanyResponse, VerificationDecision

if TYPE_CHECKING:
    from company_review.repositories.base import CompanyRepository

logger = structlog.get_logger(__name__)


def validate_decision(decision: VerificationDecision) -> None:
    """A rejection must state a reason; approval notes are optional."""
    if not decision.is_approved and not (decision.notes or "").strip():
        raise ValidationError("Notes are required when rejecting a company")


async def decide_verification(
    repository: "CompanyRepository",
    company_id: str,
    decision: VerificationDecision,
    role: Union[Role, str],
    enforce_notes: bool = True,
) -> CompanyResponse:
    """
    Approve or reject a company.

    Args:
        repository: company store
        company_id: company to decide on
        decision: approve/reject plus notes
        role: caller role (ADMIN / SUPER_ADMIN)
        enforce_notes: bulk actions pass False; they never required notes

    Returns:
        The updated company with ``is_verified == decision.is_approved``.
        Merging it back into a listing is the caller's job (``CompanyPage.upsert``).

    Raises:
        AuthorizationError, ValidationError: before any repository call
        NotFoundError: unknown company id
        PersistenceError: repository failure, propagated unchanged
    """
    user_role = authorize(role, "companies:verify")
    if enforce_notes:
        validate_decision(decision)

    company = await repository.decide_verification(company_id, decision)

    # Structured log line doubles as the audit trail for the decision notes
    logger.info(
        "company_verification_decided",
        company_id=company.id,
        approved=decision.is_approved,
        is_verified=company.is_verified,
        notes=decision.notes or "",
        role=user_role.value,
    )
    return company
