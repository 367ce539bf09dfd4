"""
Bulk Action Processor

Fans one approve/reject decision out over many companies. A failing company
never stops the batch; failures are counted and reported per id.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Union

import structlog

from company_review.core.exceptions import NotFoundError, PersistenceError, ValidationError
from company_review.core.security import Role, authorize
from company_review.schemas.company import (
    BulkActionResult,
    BulkActionType,
    BulkCompanyAction,
    VerificationDecision,
)
from company_review.services.verification import decide_verification

if TYPE_CHECKING:
    from company_review.repositories.base import CompanyRepository

logger = structlog.get_logger(__name__)

_PAST_TENSE = {
    BulkActionType.APPROVE: "approved",
    BulkActionType.REJECT: "rejected",
}


def _summary(action: BulkActionType, succeeded: int, failed: int, total: int) -> str:
    message = f"Successfully {_PAST_TENSE[action]} {succeeded} of {total} companies"
    if failed:
        message += f" ({failed} failed)"
    return message


async def process_bulk_action(
    repository: "CompanyRepository",
    bulk_action: BulkCompanyAction,
    role: Union[Role, str],
) -> BulkActionResult:
    """
    Apply ``bulk_action`` to every distinct company id.

    The shared notes go to every item; unlike a single rejection, a bulk
    rejection does not require them.

    Raises:
        AuthorizationError: caller may not verify companies
        ValidationError: no company ids given (raised before any repository call)
    """
    user_role = authorize(role, "companies:verify")

    company_ids = bulk_action.distinct_ids
    if not company_ids:
        raise ValidationError("Select at least one company")

    decision = VerificationDecision(
        is_approved=bulk_action.action == BulkActionType.APPROVE,
        notes=bulk_action.notes,
    )

    succeeded = 0
    failed = 0
    errors: List[Dict[str, Any]] = []

    for company_id in company_ids:
        try:
            await decide_verification(
                repository, company_id, decision, user_role, enforce_notes=False
            )
            succeeded += 1
        except (NotFoundError, PersistenceError) as e:
            failed += 1
            errors.append({"company_id": company_id, "error": e.message})
            logger.warning(
                "bulk_action_item_failed",
                company_id=company_id,
                action=bulk_action.action.value,
                error=e.message,
            )

    result = BulkActionResult(
        message=_summary(bulk_action.action, succeeded, failed, len(company_ids)),
        succeeded=succeeded,
        failed=failed,
        total=len(company_ids),
        errors=errors,
    )

    logger.info(
        "bulk_action_completed",
        action=bulk_action.action.value,
        succeeded=succeeded,
        failed=failed,
        total=len(company_ids),
        role=user_role.value,
    )
    return result
